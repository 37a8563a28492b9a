"""HTTP clients for Spotify and the curator backend."""

from .backend import BackendError, CuratorBackendClient
from .spotify_api import LOGIN_SCOPE, SpotifyAPIError, SpotifyWebAPI

__all__ = [
    "BackendError",
    "CuratorBackendClient",
    "LOGIN_SCOPE",
    "SpotifyAPIError",
    "SpotifyWebAPI",
]
