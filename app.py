import logging

from flask import Flask, jsonify
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.middleware.proxy_fix import ProxyFix

from config import Config
from routes import health_bp, auth_bp, setup_bp, collection_bp, settings_bp, admin_bp, backup_bp

from models import db
from security.bruteforce import AttemptThrottle
from security.installation import require_installation
from security.tokens import TokenService
from utils.auth_context import load_current_user
from utils.blocklist import reject_blocked_ip
from utils.i18n import translate

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_object=Config, overrides=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    # the production switch always wins for the cookie flag
    if app.config.get("PROD"):
        app.config["SESSION_COOKIE_SECURE"] = True

    configure_logging(app)

    if app.config.get("PROD"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(setup_bp)
    app.register_blueprint(collection_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(backup_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db, render_as_batch=True)

    # Auth services, one instance per app
    app.extensions["token_service"] = TokenService(
        app.config["JWT_SECRET"],
        app.config.get("TOKEN_LIFETIME_SECONDS", 3 * 24 * 60 * 60),
    )
    app.extensions["attempt_throttle"] = AttemptThrottle(
        max_attempts=app.config.get("MAX_LOGIN_ATTEMPTS", 4),
        block_seconds=app.config.get("LOCKOUT_SECONDS", 300),
    )

    # Request pipeline, in this order: IP denylist -> installation -> identity
    app.before_request(reject_blocked_ip)
    app.before_request(require_installation)
    app.before_request(load_current_user)

    @app.errorhandler(SQLAlchemyError)
    def _storage_failure(exc):
        db.session.rollback()
        logger.exception("Storage failure: %s", exc)
        return jsonify(error=translate("errors.generic_server_error")), 500

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        return resp

    register_cli(app)

    return app

#-------------------------
import json

import click
from models.user import User
from utils.backup import backup_filename, export_snapshot


def register_cli(app):
    @app.cli.command("make-admin")
    @click.argument("email")
    def make_admin(email):
        """Grant the administrator flag to an account by email (recovery)."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo("User not found")
            return

        if not user.is_admin:
            user.is_admin = True
            db.session.commit()

        click.echo(f"{user.email} is an administrator")

    @app.cli.command("export-backup")
    @click.argument("path", required=False)
    def export_backup(path):
        """Write a full backup document to PATH (default: dated file name)."""
        path = path or backup_filename()
        data = export_snapshot()
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        click.echo(f"Backup written to {path}: {len(data['users'])} users, "
                   f"{len(data['albums'])} albums, {len(data['logs'])} logs")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=app.config["PORT"])
