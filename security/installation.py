import logging

from flask import current_app, redirect, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from models import db
from security.credentials import count_users

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_PREFIXES = ("/setup", "/static", "/login", "/backup", "/health")


def is_exempt(path: str) -> bool:
    prefixes = current_app.config.get("INSTALL_EXEMPT_PREFIXES", DEFAULT_EXEMPT_PREFIXES)
    return any(path.startswith(p) for p in prefixes)


def require_installation():
    """
    before_request hook: until the first account exists, everything outside
    the allow-list is sent to the setup page.
    """
    if is_exempt(request.path):
        return None

    try:
        installed = count_users() > 0
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Installation check failed; letting request through")
        return None

    if not installed:
        logger.debug("No accounts yet, redirecting %s to setup", request.path)
        return redirect(url_for("setup.setup_page"))
    return None
