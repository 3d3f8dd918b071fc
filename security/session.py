from flask import after_this_request, current_app


def _cookie_name() -> str:
    return current_app.config.get("AUTH_COOKIE_NAME", "jwt")


def set_session_cookie(resp, token: str):
    resp.set_cookie(
        _cookie_name(),
        token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("TOKEN_LIFETIME_SECONDS", 3 * 24 * 60 * 60),
        path="/",
    )
    return resp


def clear_session_cookie(resp):
    resp.delete_cookie(
        _cookie_name(),
        path="/",
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
    )
    return resp


def _sets_session_cookie(resp) -> bool:
    prefix = _cookie_name() + "="
    return any(h.startswith(prefix) for h in resp.headers.getlist("Set-Cookie"))


def clear_session_cookie_later() -> None:
    """
    Expire the session cookie on whatever response this request produces,
    unless the handler issued a fresh one (e.g. a login on top of a stale
    cookie).
    """

    @after_this_request
    def _clear(resp):
        if not _sets_session_cookie(resp):
            clear_session_cookie(resp)
        return resp


def read_session_token(request) -> str | None:
    return request.cookies.get(_cookie_name()) or None
