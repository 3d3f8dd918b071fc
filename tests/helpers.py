ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-secret"
USER_EMAIL = "alice@example.com"
USER_PASSWORD = "alice-secret"


def session_cookie(c, app):
    cookie = c.get_cookie(app.config["AUTH_COOKIE_NAME"])
    return cookie.value if cookie else None


def clears_session_cookie(resp, name="jwt") -> bool:
    for header in resp.headers.getlist("Set-Cookie"):
        if header.startswith(name + "=") and ("Max-Age=0" in header or "1970" in header):
            return True
    return False
