import ipaddress
import logging

from flask import request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.blocked_ip import BlockedIP
from utils.i18n import translate

logger = logging.getLogger(__name__)


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    first = forwarded.split(",")[0].strip()
    return first or request.remote_addr or "unknown"


def normalize_ip(value) -> str | None:
    """Canonical string form of an IP address, or None when it is not one."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def is_ip_blocked(ip: str) -> bool:
    if not ip:
        return False
    return BlockedIP.query.filter_by(ip=ip).first() is not None


def reject_blocked_ip():
    """
    before_request hook. Answers 403 for denylisted addresses; a storage
    error here lets the request through rather than locking everyone out.
    """
    ip = client_ip()
    try:
        blocked = is_ip_blocked(ip)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("IP denylist lookup failed for %s", ip)
        return None

    if blocked:
        logger.warning("Rejected request from blocked IP %s", ip)
        return translate("common.forbidden"), 403
    return None
