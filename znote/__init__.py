"""
Server Znote: package dell'applicazione Flask.
"""

from flask import Flask, jsonify
from flask_cors import CORS

from config import DevConfig
from .extensions import init_extensions

__version__ = "1.0.0"


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    app.url_map.strict_slashes = False
    init_extensions(app)

    from .errors import register_error_handlers
    register_error_handlers(app)

    _register_blueprints(app)
    _init_cors(app)

    app.logger.info(
        "Applicazione Flask inizializzata.", extra={"env": app.config.get("ENV")}
    )

    @app.route("/")
    def index():
        return jsonify(
            {"message": "Znote API Server", "version": __version__, "status": "running"}
        )

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    from .api import api_auth_bp, api_ideas_bp, api_notes_bp, api_tasks_bp

    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(api_notes_bp, url_prefix="/api/notes")
    app.register_blueprint(api_tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(api_ideas_bp, url_prefix="/api/ideas")


def _init_cors(app: Flask) -> None:
    """Abilita il client browser (CORS_ORIGIN) a chiamare l'API con credenziali."""
    origin = app.config.get("CORS_ORIGIN")
    if not origin:
        return

    CORS(
        app,
        resources={r"/api/*": {"origins": origin}},
        supports_credentials=True,
        allow_headers=["Authorization", "Content-Type"],
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    )
