"""Route blueprints exposed via Flask."""

from .auth import auth_bp
from .playlist import playlist_bp
from .health import health_bp

__all__ = [
    "auth_bp",
    "playlist_bp",
    "health_bp",
]
