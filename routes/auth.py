import logging

from flask import Blueprint, jsonify, redirect

from security.bruteforce import get_attempt_throttle
from security.credentials import find_by_credential, normalize_email, verify_credentials
from security.errors import InvalidCredential, RateLimited
from security.session import clear_session_cookie, set_session_cookie
from security.tokens import get_token_service
from utils.audit import record_login_failure, record_login_success
from utils.auth_context import current_identity
from utils.i18n import translate
from utils.payload import request_data

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.get("/login")
def login_page():
    if current_identity().is_authenticated:
        return redirect("/")
    return jsonify(message=translate("common.login_required")), 200


@auth_bp.post("/login")
def login():
    data = request_data()
    email = normalize_email(data.get("email"))
    password = data.get("password")
    if not isinstance(password, str):
        password = ""
    throttle = get_attempt_throttle()

    # blocked identifiers never reach the credential store
    try:
        throttle.check(email)
    except RateLimited as exc:
        logger.info("Login throttled for %s (%ss left)", email, exc.retry_after)
        return jsonify(
            errors={"login": translate("errors.too_many_attempts_timed", seconds=exc.retry_after)},
            retry_after_seconds=exc.retry_after,
        ), 429

    try:
        user = verify_credentials(email, password)
    except InvalidCredential as exc:
        fail_count, blocked_now = throttle.record_failure(email)
        logger.info("Login failed for %s: %s (count=%s)", email, exc.reason, fail_count)
        known = find_by_credential(email) if exc.reason == InvalidCredential.WRONG_SECRET else None
        record_login_failure(email, user=known)

        if blocked_now:
            return jsonify(
                errors={"login": translate("errors.too_many_attempts_blocked", seconds=throttle.block_seconds)},
                retry_after_seconds=throttle.block_seconds,
            ), 429
        # same answer for unknown email and wrong password
        return jsonify(errors={"login": translate("errors.invalid_credentials")}), 400

    throttle.record_success(email)
    record_login_success(user)

    token = get_token_service().issue(user.id)
    resp = jsonify(user=user.id)
    set_session_cookie(resp, token)
    return resp, 200


@auth_bp.get("/logout")
def logout():
    resp = redirect("/")
    clear_session_cookie(resp)
    return resp
