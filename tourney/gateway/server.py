"""
API gateway: combines the auth, tournaments and subscribers blueprints.
This is the local entrypoint for development.
"""

import logging
import os
from typing import Any, Tuple

from flask import Flask, Response, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound as RouteNotFound

from tourney.auth_service.passwords import PasswordService
from tourney.auth_service.utils import TokenService
from tourney.config import config
from tourney.database.stores import SubscriberStore, TournamentStore, UserStore
from tourney.errors import ServiceError, StorageFailure

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def create_app(config_name: str = None, **overrides: Any) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config_name (str, optional): Key into `tourney.config.config`.
            Defaults to the APP_ENV environment variable.
        **overrides: Values that replace the selected config's keys.

    Returns:
        Flask: The configured Flask application.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "default")

    app = Flask(__name__, static_folder=None)
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)

    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()]
    CORS(app, resources={
        r"/api/*": {
            "origins": origins or "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    # --- SERVICES ---
    # Built once; read-only for the life of the process.
    app.tokens = TokenService(app.config["JWT_SECRET"], app.config["TOKEN_EXPIRATION_MINUTES"])
    app.passwords = PasswordService(
        time_cost=app.config["ARGON2_TIME_COST"],
        memory_cost=app.config["ARGON2_MEMORY_COST"],
        parallelism=app.config["ARGON2_PARALLELISM"],
    )
    database_url = app.config["DATABASE_URL"]
    app.users = UserStore(database_url)
    app.tournaments = TournamentStore(database_url)
    app.subscribers = SubscriberStore(database_url)

    # --- REGISTER BLUEPRINTS ---
    from tourney.auth_service.routes import auth_bp
    from tourney.tournaments_service.routes import tournaments_bp
    from tourney.subscribers_service.routes import subscribers_bp

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(tournaments_bp, url_prefix="/api/tournaments")
    app.register_blueprint(subscribers_bp, url_prefix="/api")
    logging.info("All blueprints registered successfully.")

    register_error_handlers(app)

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    if app.config["SERVE_CLIENT"]:
        register_client_routes(app, app.config["CLIENT_BUILD_DIR"])

    return app


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ServiceError)
    def service_error(err: ServiceError) -> Tuple[Response, int]:
        if isinstance(err, StorageFailure):
            # Details were logged where the driver error was caught
            logging.error(f"Storage failure: {err.__cause__!r}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def http_error(err: HTTPException) -> Tuple[Response, int]:
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def internal_error(err: Exception) -> Tuple[Response, int]:
        logging.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500


def register_client_routes(app: Flask, build_dir: str) -> None:
    """Serve the built single-page client, falling back to index.html for client-side routes."""
    build_dir = os.path.abspath(build_dir)

    @app.route("/<path:path>")
    def client(path: str):
        if path.startswith("api/"):
            raise RouteNotFound()
        if os.path.isfile(os.path.join(build_dir, path)):
            return send_from_directory(build_dir, path)
        return send_from_directory(build_dir, "index.html")


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config.get("DEBUG", False))
