import logging

from flask import Blueprint, jsonify, redirect, url_for

from security.credentials import count_users, create_user, normalize_email, normalize_username, validate_account_fields
from security.errors import DuplicateAccount
from security.session import set_session_cookie
from security.tokens import get_token_service
from utils.i18n import translate
from utils.payload import request_data

logger = logging.getLogger(__name__)

setup_bp = Blueprint("setup", __name__, url_prefix="/setup")


@setup_bp.get("")
def setup_page():
    if count_users() > 0:
        return redirect(url_for("auth.login_page"))
    return jsonify(setup_required=True, message=translate("common.setup_required")), 200


@setup_bp.post("")
def setup():
    # once any account exists, setup can never run again
    if count_users() > 0:
        logger.warning("Rejected setup attempt on an initialized installation")
        return redirect(url_for("auth.login_page"))

    data = request_data()
    username = normalize_username(data.get("username"))
    email = normalize_email(data.get("email"))
    password = data.get("password") or ""

    errors = validate_account_fields(username, email, password)
    if errors:
        return jsonify(error=translate("errors.setup_error"), details=[translate(e) for e in errors]), 400

    try:
        admin = create_user(username, email, password, is_admin=True)
    except DuplicateAccount:
        # a concurrent setup won the race
        return redirect(url_for("auth.login_page"))

    logger.info("Installation initialized with administrator id=%s", admin.id)

    resp = redirect("/")
    set_session_cookie(resp, get_token_service().issue(admin.id))
    return resp
