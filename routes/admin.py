import logging

from flask import Blueprint, jsonify, redirect, request, url_for
from sqlalchemy.exc import IntegrityError

from models import db
from models.blocked_ip import BlockedIP
from models.login_log import LoginLog
from models.user import User
from security.credentials import create_user, normalize_email, normalize_username, set_password, validate_account_fields
from security.errors import DuplicateAccount
from security.password import generate_password
from security.rbac import require_admin
from utils.auth_context import current_user
from utils.blocklist import normalize_ip
from utils.i18n import translate
from utils.payload import request_data

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

RECENT_LOGS = 20


def _back(msg: str | None = None):
    if msg:
        return redirect(url_for("admin.dashboard", msg=msg))
    return redirect(url_for("admin.dashboard"))


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@admin_bp.get("")
@require_admin
def dashboard():
    users = User.query.order_by(User.last_change.desc()).all()
    blocked = BlockedIP.query.order_by(BlockedIP.created_at.desc()).all()
    logs = LoginLog.query.order_by(LoginLog.timestamp.desc()).limit(RECENT_LOGS).all()

    msg = request.args.get("msg")
    return jsonify(
        users=[u.to_public_dict() for u in users],
        blocked_ips=[
            {"id": b.id, "ip": b.ip, "created_at": b.created_at.isoformat()}
            for b in blocked
        ],
        logs=[row.to_dict() for row in logs],
        message=translate(f"messages.{msg}") if msg else None,
    ), 200


@admin_bp.post("/add-user")
@require_admin
def add_user():
    data = request_data()
    username = normalize_username(data.get("username"))
    email = normalize_email(data.get("email"))

    errors = validate_account_fields(username, email)
    if errors:
        return jsonify(error=translate(errors[0]), details=[translate(e) for e in errors]), 400

    # shown once to the admin; only the hash is stored
    password = generate_password()
    try:
        user = create_user(username, email, password)
    except DuplicateAccount as exc:
        key = {"username": "errors.username_taken", "email": "errors.email_taken"}.get(exc.field, "errors.account_exists")
        return jsonify(error=translate(key)), 409

    logger.info("Admin id=%s created user id=%s", current_user().id, user.id)
    return jsonify(
        message=translate("messages.user_created", name=user.username),
        user=user.to_public_dict(),
        password=password,
    ), 201


@admin_bp.post("/reset-password")
@require_admin
def reset_password():
    user_id = _int_or_none(request_data().get("userId"))
    user = User.query.get(user_id) if user_id is not None else None
    if not user:
        return _back()

    password = generate_password()
    set_password(user, password)

    logger.info("Admin id=%s reset password of user id=%s", current_user().id, user.id)
    return jsonify(
        message=translate("messages.password_reset_success", name=user.username),
        user=user.to_public_dict(),
        password=password,
    ), 200


@admin_bp.post("/delete-user")
@require_admin
def delete_user():
    user_id = _int_or_none(request_data().get("userId"))
    if user_id is None:
        return _back()
    if user_id == current_user().id:
        return _back("delete_self_error")

    user = User.query.get(user_id)
    if not user:
        return _back()

    db.session.delete(user)
    db.session.commit()
    logger.info("Admin id=%s deleted user id=%s", current_user().id, user_id)
    return _back("user_deleted")


@admin_bp.post("/block-ip")
@require_admin
def block_ip():
    ip = normalize_ip(request_data().get("ipAddress"))
    if not ip:
        return _back("ip_invalid")

    if not BlockedIP.query.filter_by(ip=ip).first():
        db.session.add(BlockedIP(ip=ip))
        try:
            db.session.commit()
        except IntegrityError:
            # blocked concurrently; the unique constraint kept one row
            db.session.rollback()

    logger.info("Admin id=%s blocked IP %s", current_user().id, ip)
    return _back("ip_blocked")


@admin_bp.post("/unblock-ip")
@require_admin
def unblock_ip():
    row_id = _int_or_none(request_data().get("ipId"))
    row = BlockedIP.query.get(row_id) if row_id is not None else None
    if row:
        ip = row.ip
        db.session.delete(row)
        db.session.commit()
        logger.info("Admin id=%s unblocked IP %s", current_user().id, ip)
    return _back("ip_unblocked")
