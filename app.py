import logging
import sys
from typing import Optional
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

from config import Config
from src.clients.spotify_api import SpotifyWebAPI
from src.interfaces.http.routes import auth_bp, playlist_bp, health_bp
from src.observability import configure_logging, configure_structured_logging, metrics_blueprint
from src.settings import AppSettings, ConfigurationError, load_app_settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    spotify_api: Optional[SpotifyWebAPI] = None,
) -> Flask:
    """Build the Flask app. Raises ConfigurationError when credentials are missing."""
    settings = (settings or load_app_settings()).require_credentials()

    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.update(
        {
            'SPOTIFY_CLIENT_ID': settings.spotify_client_id,
            'SPOTIFY_CLIENT_SECRET': settings.spotify_client_secret,
            'REDIRECT_URI': settings.redirect_uri,
            'CLIENT_APP_URL': settings.client_app_url,
            'PORT': settings.port,
        }
    )
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    CORS(app, origins=settings.cors_allowed_origins)

    app.extensions['app_settings'] = settings
    app.extensions['spotify_api'] = spotify_api or SpotifyWebAPI(
        api_url=settings.api_url,
        accounts_url=settings.accounts_url,
        timeout=settings.http_timeout,
    )

    # --- Register Blueprints ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


def main() -> int:
    debug_mode = bool(Config.DEBUG)
    log_file_path = configure_logging(Config.LOG_DIR, enable_console=Config.ENABLE_CONSOLE_LOGS)
    logger.info("File logging initialized at %s", log_file_path)

    try:
        app = create_app()
    except ConfigurationError as exc:
        # No partial startup on missing or invalid configuration
        logger.error("%s", exc)
        print(str(exc), file=sys.stderr)
        return 1

    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True

    port = app.extensions['app_settings'].port
    logger.info("Server running on http://localhost:%s", port)
    app.run(debug=debug_mode, host='0.0.0.0', port=port)
    return 0


if __name__ == '__main__':
    sys.exit(main())
