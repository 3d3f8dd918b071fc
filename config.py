import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Config:
    # Secrets
    SECRET_KEY = os.getenv("SESSION_SECRET", "dev-only-change-me")
    JWT_SECRET = os.getenv("PASSJWT", "dev-only-jwt-change-me")

    # Production switch: secure cookies + trust the first proxy hop
    PROD = _env_flag("PROD")

    PORT = int(os.getenv("VINYL_PORT", "5002"))

    # SQLite database file stored next to the app as vinylvault.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "vinylvault.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session cookie holding the signed token
    AUTH_COOKIE_NAME = "jwt"

    # 3 days token lifetime
    TOKEN_LIFETIME_SECONDS = 3 * 24 * 60 * 60

    # Session/cookie security defaults
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = PROD

    # Brute-force protection
    MAX_LOGIN_ATTEMPTS = 4
    LOCKOUT_SECONDS = 5 * 60

    # Passwords
    BCRYPT_ROUNDS = 10
    PASSWORD_MIN_LEN = 6
    GENERATED_PASSWORD_LENGTH = 12

    # Reachable before the first account exists
    INSTALL_EXEMPT_PREFIXES = ("/setup", "/static", "/login", "/backup", "/health")

    SUPPORTED_LANGUAGES = ("fr", "en")
    DEFAULT_LANGUAGE = "fr"

    BACKUP_FORMAT_VERSION = "1.0.0"

    # Optional callable ip -> {"country": ..., "city": ...}
    GEOIP_LOOKUP = None

    # External catalog (Discogs) credential, passed through untouched
    DISCOGS_TOKEN = os.getenv("DISCOGS_TOKEN")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False
