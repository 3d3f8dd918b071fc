from .health import health_bp
from .auth import auth_bp
from .setup import setup_bp
from .collection import collection_bp
from .settings import settings_bp
from .admin import admin_bp
from .backup import backup_bp
