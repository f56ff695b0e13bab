"""Initialize the Flask app and the Firebase Admin SDK."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask

from .core.constants import (
    DEFAULT_LEADERBOARD_PAGE_SIZE,
    DEFAULT_TICKET_CODE_LENGTH,
    DEFAULT_TICKET_TTL_MINUTES,
)

DEFAULT_CREDENTIALS_FILE = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
)


def _certificate_from_env(app):
    raw = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if not raw:
        return None, None
    try:
        info = json.loads(raw)
        return credentials.Certificate(info), info.get("project_id")
    except (json.JSONDecodeError, ValueError) as e:
        app.logger.error(f"Ignoring malformed FIREBASE_CREDENTIALS_JSON: {e}")
        return None, None


def _certificate_from_file(app, path):
    if not os.path.exists(path):
        return None, None
    try:
        with open(path) as f:
            info = json.load(f)
        return credentials.Certificate(path), info.get("project_id")
    except (json.JSONDecodeError, ValueError) as e:
        app.logger.error(f"Ignoring unreadable credentials file {path}: {e}")
        return None, None


def _load_credentials(app):
    """Resolve Firebase credentials: env JSON, then a key file, then ADC."""
    cred, project_id = _certificate_from_env(app)
    if cred is None:
        cred, project_id = _certificate_from_file(
            app, app.config["FIREBASE_CREDENTIALS_PATH"]
        )
    if cred is None:
        try:
            cred = credentials.ApplicationDefault()
        except Exception as e:
            app.logger.error(f"No Firebase credentials available: {e}")
            return None, None
    return cred, project_id or os.environ.get("FIREBASE_PROJECT_ID")


def _init_firebase(app):
    cred, project_id = _load_credentials(app)
    if cred is None or firebase_admin._apps:
        return
    try:
        firebase_admin.initialize_app(
            cred, {"projectId": project_id} if project_id else None
        )
    except ValueError:
        app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_CREDENTIALS_PATH=(
            os.environ.get("FIREBASE_CREDENTIALS_PATH") or DEFAULT_CREDENTIALS_FILE
        ),
        TICKET_TTL_MINUTES=int(
            os.environ.get("TICKET_TTL_MINUTES") or DEFAULT_TICKET_TTL_MINUTES
        ),
        TICKET_CODE_LENGTH=int(
            os.environ.get("TICKET_CODE_LENGTH") or DEFAULT_TICKET_CODE_LENGTH
        ),
        LEADERBOARD_PAGE_SIZE=int(
            os.environ.get("LEADERBOARD_PAGE_SIZE") or DEFAULT_LEADERBOARD_PAGE_SIZE
        ),
    )

    if test_config:
        app.config.update(test_config)

    # Tests run against an in-memory store instead of Firebase
    if not app.config.get("TESTING"):
        _init_firebase(app)

    from . import bracket, error_handlers, leaderboard, report, ticket

    for blueprint in (ticket.bp, bracket.bp, report.bp, leaderboard.bp):
        app.register_blueprint(blueprint)
    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/health")
    def health_check():
        """Perform a simple health check."""
        return "OK", 200

    return app
