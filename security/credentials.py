"""
Credential store: account lookup, secret verification and account
mutations that touch credentials.

Passwords are hashed before the row is written; no plaintext ever reaches
storage. Uniqueness of username and email is enforced by the database;
callers may pre-check for a friendlier message but the IntegrityError
path below is what actually guards against duplicates.
"""
import logging
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.user import User
from security.errors import DuplicateAccount, InvalidCredential
from security.password import hash_password, verify_password

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def normalize_email(value) -> str:
    return (value or "").strip().lower() if isinstance(value, str) else ""


def normalize_username(value) -> str:
    return (value or "").strip() if isinstance(value, str) else ""


def is_valid_email(email: str) -> bool:
    return isinstance(email, str) and "@" in email and len(email) <= 255


def validate_account_fields(username: str, email: str, password: str | None = None) -> list[str]:
    """Returns message keys for every invalid field (empty list when valid)."""
    errors = []
    if not username or len(username) > 80:
        errors.append("errors.username_required")
    if not is_valid_email(email):
        errors.append("errors.email_invalid")
    if password is not None:
        errors.extend(validate_password(password))
    return errors


def validate_password(password) -> list[str]:
    min_len = current_app.config.get("PASSWORD_MIN_LEN", 6)
    if not isinstance(password, str) or len(password) < min_len:
        return ["errors.password_too_short"]
    # bcrypt only takes the first 72 bytes and newer releases refuse longer input
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return ["errors.password_too_long"]
    return []


def count_users() -> int:
    return User.query.count()


def find_by_credential(identifier: str) -> User | None:
    email = normalize_email(identifier)
    if not email:
        return None
    return User.query.filter_by(email=email).first()


def verify_credentials(identifier: str, password: str) -> User:
    user = find_by_credential(identifier)
    if user is None:
        raise InvalidCredential(InvalidCredential.UNKNOWN_IDENTIFIER)
    if not verify_password(password, user.password_hash):
        raise InvalidCredential(InvalidCredential.WRONG_SECRET)
    return user


def _duplicate_field(exc: IntegrityError) -> str:
    text = str(exc.orig).lower()
    if "email" in text:
        return "email"
    if "username" in text:
        return "username"
    return "account"


def create_user(username: str, email: str, password: str, is_admin: bool = False) -> User:
    user = User(
        username=normalize_username(username),
        email=normalize_email(email),
        password_hash=hash_password(password),
        is_admin=is_admin,
        last_change=datetime.utcnow(),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateAccount(_duplicate_field(exc)) from exc

    logger.info("Created account id=%s admin=%s", user.id, is_admin)
    return user


def set_password(user: User, new_password: str) -> None:
    """Replaces the secret and moves last_change forward, revoking older tokens."""
    now = datetime.utcnow()
    user.password_hash = hash_password(new_password)
    # never move backwards, even if the wall clock does
    user.last_change = max(now, user.last_change) if user.last_change else now
    db.session.commit()


def rename_user(user: User, new_username: str) -> None:
    user.username = normalize_username(new_username)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise DuplicateAccount("username") from exc
