import secrets
import string

import bcrypt
from flask import current_app

GENERATED_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()_+"


def hash_password(plain_password: str) -> str:
    if not isinstance(plain_password, str) or len(plain_password) == 0:
        raise ValueError("Password must be a non-empty string")

    rounds = current_app.config.get("BCRYPT_ROUNDS", 12)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not isinstance(plain_password, str) or not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            password_hash.encode("utf-8")
        )
    except ValueError:
        # malformed stored hash (e.g. restored from a foreign backup)
        return False


def generate_password(length: int | None = None) -> str:
    """Random password handed to an admin once, for a created or reset account."""
    if length is None:
        length = current_app.config.get("GENERATED_PASSWORD_LENGTH", 12)
    return "".join(secrets.choice(GENERATED_ALPHABET) for _ in range(length))
