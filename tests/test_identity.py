from datetime import datetime, timedelta

from models import db
from models.user import User
from security.credentials import set_password
from utils.auth_context import ANONYMOUS, Authenticated, resolve_identity


def _token(app, uid, issued_at=None):
    return app.extensions["token_service"].issue(uid, issued_at=issued_at)


def test_no_token_is_anonymous_without_clearing(app):
    with app.app_context():
        assert resolve_identity(None) == (ANONYMOUS, False)


def test_valid_token_resolves_user(app, make_user):
    uid = make_user()
    with app.app_context():
        identity, stale = resolve_identity(_token(app, uid))
        assert isinstance(identity, Authenticated)
        assert identity.user.id == uid
        assert identity.is_admin is False
        assert stale is False


def test_admin_flag_comes_from_stored_flag(app, admin_id):
    with app.app_context():
        identity, _ = resolve_identity(_token(app, admin_id))
        assert identity.is_admin is True


def test_invalid_token_is_anonymous_and_stale(app):
    with app.app_context():
        assert resolve_identity("garbage") == (ANONYMOUS, True)


def test_token_for_deleted_user_is_stale(app, make_user):
    uid = make_user()
    token = _token(app, uid)
    with app.app_context():
        db.session.delete(User.query.get(uid))
        db.session.commit()
        assert resolve_identity(token) == (ANONYMOUS, True)


def test_token_issued_before_password_change_is_revoked(app, make_user):
    uid = make_user()
    old = _token(app, uid, issued_at=datetime.utcnow() - timedelta(minutes=5))
    with app.app_context():
        set_password(User.query.get(uid), "rotated-secret")
        assert resolve_identity(old) == (ANONYMOUS, True)

        fresh = _token(app, uid)
        identity, stale = resolve_identity(fresh)
        assert identity.is_authenticated and not stale


def test_token_issued_one_microsecond_before_change_is_revoked(app, make_user):
    uid = make_user()
    with app.app_context():
        user = User.query.get(uid)
        changed = datetime(2030, 1, 1, 12, 0, 0, 500000)
        user.last_change = changed
        db.session.commit()

        before = _token(app, uid, issued_at=changed - timedelta(microseconds=1))
        at = _token(app, uid, issued_at=changed)
        assert resolve_identity(before)[0] is ANONYMOUS
        assert resolve_identity(at)[0].is_authenticated
