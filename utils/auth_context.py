"""
Per-request identity.

`load_current_user` runs as a before_request hook and stores exactly one
immutable identity value on `g.identity`: either ANONYMOUS or an
Authenticated(user, is_admin). Nothing downstream mutates it.
"""
from dataclasses import dataclass

from flask import g, request

from models.user import User
from security.session import clear_session_cookie_later, read_session_token
from security.tokens import get_token_service, to_timestamp


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False
    is_admin = False
    user = None


@dataclass(frozen=True)
class Authenticated:
    user: User
    is_admin: bool

    is_authenticated = True


ANONYMOUS = Anonymous()


def resolve_identity(token: str | None):
    """
    Returns (identity, stale). `stale` is True when a token was presented
    but cannot be honoured any more, so the caller should drop the cookie.
    """
    if not token:
        return ANONYMOUS, False

    claims = get_token_service().verify(token)
    if claims is None:
        return ANONYMOUS, True

    user = User.query.get(claims.subject_id)
    if user is None:
        return ANONYMOUS, True

    # credential rotation: anything issued before the last change is revoked
    if user.last_change and claims.issued_at < to_timestamp(user.last_change):
        return ANONYMOUS, True

    return Authenticated(user=user, is_admin=bool(user.is_admin)), False


def load_current_user():
    identity, stale = resolve_identity(read_session_token(request))
    g.identity = identity
    if stale:
        clear_session_cookie_later()


def current_identity():
    return getattr(g, "identity", ANONYMOUS)


def current_user() -> User | None:
    return current_identity().user
