import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, jsonify, g
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
import requests

from config import Config
from trackproxy.domain.catalog import SearchGateway, TokenManager
from trackproxy.errors import ProxyError
from trackproxy.interfaces.http.routes import health_bp, search_bp
from trackproxy.observability import configure_structured_logging, metrics_blueprint
from trackproxy.settings import load_proxy_settings
from trackproxy.utils.cache import TokenCache


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Keep structured handlers; drop earlier file handlers so reruns don't duplicate
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # Read through the module so a reloaded Config is honored
    from config import Config as _Cfg
    if _Cfg.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def _register_error_handlers(app):
    @app.errorhandler(ProxyError)
    def _handle_proxy_error(exc: ProxyError):
        if exc.status_code < 500:
            app.logger.warning("Rejected request: %s", exc.message)
        return jsonify(exc.to_payload()), exc.status_code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.error("[Server Error] %s", exc, exc_info=True)
        return jsonify({"error": str(exc) or "Internal error"}), 500


def create_app(config_overrides=None, http_session=None, token_cache=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    configure_structured_logging(app)

    settings = load_proxy_settings(app.config)
    app.extensions['proxy_settings'] = settings

    if not settings.credentials_configured:
        app.logger.warning("[WARN] Missing SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET in .env")

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    origins = settings.cors_allowed_origins
    if "*" in origins:
        origins = "*"
    CORS(app, resources={r"/api/*": {"origins": origins}})

    # One session and one token cache per process; routes reach them via extensions
    session = http_session or requests.Session()
    cache = token_cache or TokenCache()
    token_manager = TokenManager(
        cache,
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
        session=session,
        token_url=settings.token_url,
        timeout=settings.timeout_seconds,
    )
    app.extensions['token_cache'] = cache
    app.extensions['token_manager'] = token_manager
    app.extensions['search_gateway'] = SearchGateway(
        token_manager,
        session=session,
        search_url=settings.search_url,
        default_market=settings.default_market,
        timeout=settings.timeout_seconds,
    )

    _register_error_handlers(app)

    # --- Register Blueprints ---
    app.register_blueprint(health_bp)
    app.register_blueprint(search_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    # With the reloader on, only the child process opens a log file
    if not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(Config.LOG_DIR)
        logger.info("File logging initialized at %s", log_file_path)

    application = create_app()
    logger.info("API running → http://localhost:%s", Config.PORT)
    application.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
