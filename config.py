#!/usr/bin/env python
# config.py
import os
from typing import List, Optional

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: Optional[float] = None) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # Spotify application credentials
    SPOTIFY_CLIENT_ID = os.environ.get('SPOTIFY_CLIENT_ID')
    SPOTIFY_CLIENT_SECRET = os.environ.get('SPOTIFY_CLIENT_SECRET')
    REDIRECT_URI = os.environ.get('REDIRECT_URI') or 'http://localhost:8888/callback'

    # Spotify endpoints
    SPOTIFY_ACCOUNTS_URL = os.getenv('SPOTIFY_ACCOUNTS_URL', 'https://accounts.spotify.com')
    SPOTIFY_API_URL = os.getenv('SPOTIFY_API_URL', 'https://api.spotify.com/v1')
    # Unset means the HTTP client default (no timeout)
    SPOTIFY_HTTP_TIMEOUT = _get_float('SPOTIFY_HTTP_TIMEOUT')

    # Where the browser lands after the OAuth handshake
    CLIENT_APP_URL = os.getenv('CLIENT_APP_URL', 'http://localhost:3000')
    # Where the client library reaches this backend
    BACKEND_URL = os.getenv('BACKEND_URL', 'http://localhost:8888')

    # HTTP server
    PORT = _get_int('PORT', 8888)
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', '*')

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, file logs only
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    LOG_DIR = os.getenv('LOG_DIR', os.path.join(basedir, 'log'))
