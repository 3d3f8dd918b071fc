from functools import wraps
from flask import redirect, url_for

from security.credentials import count_users
from utils.auth_context import current_identity


def _to_login():
    return redirect(url_for("auth.login_page"))


def _to_root():
    return redirect("/")


def require_authenticated(fn):
    """
    Page-flow guard: anonymous callers are sent to the login page.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not current_identity().is_authenticated:
            return _to_login()
        return fn(*args, **kwargs)
    return wrapper


def require_admin(fn):
    """
    Implies require_authenticated. Authenticated callers without the admin
    flag are silently sent back to the root; no reason is given.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if not identity.is_authenticated:
            return _to_login()
        if not identity.is_admin:
            return _to_root()
        return fn(*args, **kwargs)
    return require_authenticated(wrapper)


def require_admin_once_installed(fn):
    """
    Open while the installation has no accounts (restoring a first
    deployment from a backup); admin-only as soon as one account exists.
    """
    guarded = require_admin(fn)

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if count_users() == 0:
            return fn(*args, **kwargs)
        return guarded(*args, **kwargs)
    return wrapper
