import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, send_from_directory, request, g
from flask_cors import CORS

# --- Import our configuration and the domain wiring ---
from config import Config
from src.settings import load_app_settings
from src.domain.criteria import PromptInterpreter
from src.infrastructure.spotify import SpotifyGateway
from src.interfaces.http.routes import (
    auth_bp,
    config_bp,
    health_bp,
    playlist_bp,
    search_bp,
)
from src.observability import configure_structured_logging, metrics_blueprint


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_filename = f"log-{timestamp}"
    log_path = os.path.join(log_dir, log_filename)

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File: INFO and above
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        # If console logging is enabled, keep it concise: warnings and above
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    # Quiet Flask/Werkzeug own console handlers; let them propagate to root
    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    # spotipy logs every failed HTTP call at ERROR; we log our own summary
    logging.getLogger("spotipy.client").setLevel(logging.CRITICAL)

    return log_path


def create_app(settings_overrides=None, *, gateway_factory=None, prompt_interpreter=None):
    settings = load_app_settings(settings_overrides)

    app = Flask(__name__, static_folder=Config.STATIC_DIR, static_url_path='/static')
    app.config.from_object(Config)
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    CORS(app, resources={r"/api/*": {"origins": settings.cors_allowed_origins}})

    # Services are resolved per request from app.extensions
    app.extensions['settings'] = settings
    app.extensions['spotify_gateway_factory'] = gateway_factory or SpotifyGateway
    if prompt_interpreter is None:
        prompt_interpreter = PromptInterpreter.from_api_key(settings.openai_api_key, settings.prompt_model)
    app.extensions['prompt_interpreter'] = prompt_interpreter

    if not settings.oauth_configured:
        logger.warning("Spotify client ID or client secret not configured; /login is disabled.")

    # --- Register Blueprints ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(config_bp)
    app.register_blueprint(metrics_blueprint)
    app.register_blueprint(health_bp)

    @app.route('/')
    def index():
        return send_from_directory(app.static_folder, 'index.html')

    return app

if __name__ == '__main__':
    # Configure logging:
    # - In debug with reloader: only in the child process to avoid duplicate files
    # - In non-debug: always configure here
    debug_mode = bool(Config.DEBUG)
    if debug_mode:
        if os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
            log_file_path = configure_logging(Config.LOG_DIR)
            logger.info("File logging initialized at %s", log_file_path)
    else:
        log_file_path = configure_logging(Config.LOG_DIR)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Server running on http://localhost:%s", Config.PORT)
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=Config.PORT)
