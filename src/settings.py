#!/usr/bin/env python
"""
Centralized configuration schema for the curator backend.

Merges defaults from config.Config with optional runtime overrides and
validates the result before the Flask app is built.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config import Config


class ConfigurationError(RuntimeError):
    """Raised when startup configuration is missing or invalid."""


def _parse_origins(value: Optional[object]) -> List[str]:
    """Normalize CORS origin configuration into a unique ordered list."""
    if value is None:
        tokens: List[str] = []
    elif isinstance(value, str):
        tokens = [token.strip() for token in value.split(",")]
    elif isinstance(value, (list, tuple, set)):
        tokens = [str(token).strip() for token in value]
    else:
        tokens = [str(value).strip()]

    normalized: List[str] = []
    for token in tokens:
        if not token:
            continue
        token = token.rstrip("/") if token != "*" else token
        if token not in normalized:
            normalized.append(token)
    if not normalized or "*" in normalized:
        return ["*"]
    return normalized


class AppSettings(BaseModel):
    """Application-wide settings for the OAuth handshake and playlist proxy."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    redirect_uri: str = "http://localhost:8888/callback"

    # Endpoints
    accounts_url: str = "https://accounts.spotify.com"
    api_url: str = "https://api.spotify.com/v1"
    http_timeout: Optional[float] = None

    client_app_url: str = "http://localhost:3000"
    port: int = Field(default=8888, ge=1, le=65535)
    cors_allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("spotify_client_id", "spotify_client_secret", mode="before")
    @classmethod
    def _strip_credentials(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("accounts_url", "api_url", "client_app_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @field_validator("http_timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> Optional[float]:
        if value in (None, ""):
            return None
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return timeout if timeout > 0 else None

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _normalize_origins(cls, value: Optional[object]) -> List[str]:
        return _parse_origins(value)

    @property
    def has_credentials(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    def require_credentials(self) -> "AppSettings":
        """Fail fast when the client id or secret is absent."""
        missing = [
            name
            for name, value in (
                ("SPOTIFY_CLIENT_ID", self.spotify_client_id),
                ("SPOTIFY_CLIENT_SECRET", self.spotify_client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Missing " + " or ".join(missing) + " environment variables"
            )
        return self


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIFY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIFY_CLIENT_SECRET,
        "redirect_uri": Config.REDIRECT_URI,
        "accounts_url": Config.SPOTIFY_ACCOUNTS_URL,
        "api_url": Config.SPOTIFY_API_URL,
        "http_timeout": Config.SPOTIFY_HTTP_TIMEOUT,
        "client_app_url": Config.CLIENT_APP_URL,
        "port": Config.PORT,
        "cors_allowed_origins": Config.CORS_ALLOWED_ORIGINS,
    }
    if overrides:
        data.update(overrides)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise ConfigurationError("Invalid configuration: " + ", ".join(fields)) from exc


__all__ = [
    "AppSettings",
    "ConfigurationError",
    "load_app_settings",
]
