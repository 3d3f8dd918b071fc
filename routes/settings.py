from flask import Blueprint, jsonify, redirect, request, url_for

from models import db
from models.user import LANGUAGES, THEMES, User
from security.credentials import normalize_username, rename_user, set_password, validate_password
from security.errors import DuplicateAccount
from security.password import verify_password
from security.rbac import require_authenticated
from utils.auth_context import current_user
from utils.i18n import translate
from utils.payload import request_data

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


@settings_bp.get("")
@require_authenticated
def profile():
    return jsonify(user=current_user().to_public_dict()), 200


@settings_bp.post("/check-username")
@require_authenticated
def check_username():
    username = normalize_username(request_data().get("username"))
    if not username:
        return jsonify(success=False, message=translate("errors.username_required")), 400

    if username == current_user().username:
        return jsonify(success=True, message=translate("messages.username_current")), 200

    # advisory only: update-username relies on the unique constraint
    if User.query.filter_by(username=username).first():
        return jsonify(success=False, message=translate("errors.username_taken")), 400
    return jsonify(success=True, message=translate("messages.username_available")), 200


@settings_bp.post("/update-username")
@require_authenticated
def update_username():
    username = normalize_username(request_data().get("username"))
    if not username or len(username) > 80:
        return jsonify(success=False, message=translate("errors.username_required")), 400

    try:
        rename_user(current_user(), username)
    except DuplicateAccount:
        return jsonify(success=False, message=translate("errors.username_taken")), 400
    return redirect(url_for("settings.profile"))


@settings_bp.post("/update-password")
@require_authenticated
def update_password():
    data = request_data()
    current_password = data.get("currentPassword")
    if not isinstance(current_password, str):
        current_password = ""
    new_password = data.get("newPassword") or ""
    user = current_user()

    if not verify_password(current_password, user.password_hash):
        return jsonify(success=False, message=translate("errors.current_password_incorrect")), 400

    errors = validate_password(new_password)
    if errors:
        return jsonify(success=False, message=translate(errors[0])), 400

    # revokes every token issued so far, this session's included
    set_password(user, new_password)
    return jsonify(success=True, message=translate("messages.password_updated")), 200


@settings_bp.post("/update-theme")
@require_authenticated
def update_theme():
    theme = request_data().get("theme")
    if theme not in THEMES:
        return jsonify(success=False, message=translate("errors.invalid_theme")), 400

    current_user().theme = theme
    db.session.commit()
    return jsonify(success=True, message=translate("messages.theme_updated")), 200


@settings_bp.post("/update-language")
@require_authenticated
def update_language():
    language = request_data().get("language")
    if language not in LANGUAGES:
        return jsonify(success=False, message=translate("errors.invalid_language")), 400

    current_user().language = language
    db.session.commit()
    return redirect(request.referrer or url_for("settings.profile"))
