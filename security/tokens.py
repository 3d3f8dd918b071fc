"""
Signed, time-limited identity tokens.

A token carries the subject id and the instant it was issued. It proves a
past successful login and nothing more: whether the subject still exists,
and whether its credentials rotated since issuance, is decided by the
identity resolution layer (see utils/auth_context.py).
"""
import calendar
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from flask import current_app
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def to_timestamp(moment: datetime) -> float:
    """Naive UTC datetime -> Unix timestamp, keeping microseconds."""
    return calendar.timegm(moment.utctimetuple()) + moment.microsecond / 1_000_000


@dataclass(frozen=True)
class TokenClaims:
    subject_id: int
    issued_at: float


class TokenService:
    def __init__(self, secret: str, lifetime_seconds: int):
        if not secret:
            raise ValueError("Token signing secret is not configured")
        self._secret = secret
        self.lifetime_seconds = lifetime_seconds

    def issue(self, subject_id: int, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or datetime.utcnow()
        claims = {
            "id": subject_id,
            "iat": to_timestamp(issued_at),
            "exp": issued_at + timedelta(seconds=self.lifetime_seconds),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims | None:
        """
        Returns the claims, or None when the token is malformed, carries a
        bad signature, or has expired.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            logger.debug("Rejected session token: %s", exc)
            return None

        try:
            return TokenClaims(subject_id=int(payload["id"]), issued_at=float(payload["iat"]))
        except (KeyError, TypeError, ValueError):
            logger.debug("Rejected session token: missing or malformed claims")
            return None


def get_token_service() -> TokenService:
    return current_app.extensions["token_service"]
