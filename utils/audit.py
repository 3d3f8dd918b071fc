import logging

from flask import current_app, request

from models import db
from models.login_log import LoginLog, STATUS_FAILED, STATUS_SUCCESS
from utils.blocklist import client_ip
from utils.i18n import translate

logger = logging.getLogger(__name__)


def _geolocate(ip: str) -> dict:
    lookup = current_app.config.get("GEOIP_LOOKUP")
    if not lookup:
        return {}
    try:
        return lookup(ip) or {}
    except Exception:
        # geolocation is decoration; never fail a login over it
        logger.warning("GeoIP lookup failed for %s", ip, exc_info=True)
        return {}


def record_login(status: str, user=None, email: str | None = None) -> LoginLog:
    ip = client_ip()
    geo = _geolocate(ip)
    user_agent = request.headers.get("User-Agent", "")

    row = LoginLog(
        user_id=user.id if user else None,
        username=user.username if user else None,
        email=user.email if user else email,
        ip=ip,
        country=geo.get("country") or "XX",
        city=geo.get("city") or translate("common.unknown"),
        user_agent=user_agent[:255] if user_agent else None,
        status=status,
    )
    db.session.add(row)
    db.session.commit()
    return row


def record_login_success(user) -> LoginLog:
    return record_login(STATUS_SUCCESS, user=user)


def record_login_failure(email: str, user=None) -> LoginLog:
    return record_login(STATUS_FAILED, user=user, email=email)
