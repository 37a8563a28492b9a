#!/usr/bin/env python
"""Thin wrapper over the Spotify accounts service and Web API.

Every call is a single attempt. Non-2xx responses and transport failures
surface as :class:`SpotifyAPIError`; callers decide how to present them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

import requests
from pydantic import BaseModel, ValidationError

from src.models.dto import (
    DeviceDTO,
    PlaybackStateDTO,
    TokenPair,
    TrackDTO,
    UserProfileDTO,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_ACCOUNTS_URL = "https://accounts.spotify.com"
DEFAULT_API_URL = "https://api.spotify.com/v1"

LOGIN_SCOPE = (
    "playlist-modify-public playlist-modify-private user-read-playback-state "
    "user-modify-playback-state user-read-currently-playing streaming"
)


class SpotifyAPIError(Exception):
    """A Spotify call failed. ``status_code`` is None for transport errors."""

    def __init__(self, status_code: Optional[int], details: Any = None):
        self.status_code = status_code
        self.details = details
        if status_code is None:
            message = f"Spotify request failed: {details}"
        else:
            message = f"Spotify responded with HTTP {status_code}"
        super().__init__(message)


def _response_details(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class SpotifyWebAPI:
    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        accounts_url: str = DEFAULT_ACCOUNTS_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.accounts_url = accounts_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # --- transport ---
    def _request(
        self,
        method: str,
        url: str,
        access_token: Optional[str] = None,
        **kwargs: Any,
    ) -> requests.Response:
        headers: Dict[str, str] = dict(kwargs.pop("headers", None) or {})
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc.__class__.__name__)
            raise SpotifyAPIError(None, str(exc)) from exc

        if not response.ok:
            details = _response_details(response)
            logger.warning("%s %s -> HTTP %s", method, url, response.status_code)
            raise SpotifyAPIError(response.status_code, details)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Optional[Dict[str, Any]]:
        if response.status_code == 204 or not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise SpotifyAPIError(response.status_code, "Malformed JSON body") from exc
        if not isinstance(payload, dict):
            raise SpotifyAPIError(response.status_code, "Unexpected JSON body")
        return payload

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, response: requests.Response) -> ModelT:
        """Validate ``data`` against ``model``; schema mismatches become SpotifyAPIError."""
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Unexpected %s payload: %s", model.__name__, exc.error_count())
            raise SpotifyAPIError(
                response.status_code, f"Unexpected {model.__name__} payload"
            ) from exc

    def _api(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    # --- accounts service ---
    def authorize_url(self, client_id: str, redirect_uri: str, scope: str = LOGIN_SCOPE) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": client_id,
                "scope": scope,
                "redirect_uri": redirect_uri,
            },
            quote_via=quote,
        )
        return f"{self.accounts_url}/authorize?{query}"

    def exchange_code(
        self,
        code: Optional[str],
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> TokenPair:
        """Trade an authorization code for an access/refresh token pair."""
        response = self._request(
            "POST",
            f"{self.accounts_url}/api/token",
            data={
                "code": code or "",
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            auth=(client_id, client_secret),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        payload = self._json(response) or {}
        return self._parse(TokenPair, payload, response)

    # --- profile / browse ---
    def get_current_user(self, access_token: str) -> UserProfileDTO:
        response = self._request("GET", self._api("me"), access_token)
        return self._parse(UserProfileDTO, self._json(response) or {}, response)

    def get_recommendations(
        self,
        access_token: str,
        seed_genres: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[TrackDTO]:
        response = self._request(
            "GET",
            self._api("recommendations"),
            access_token,
            params={"seed_genres": seed_genres, "limit": limit, "offset": offset},
        )
        payload = self._json(response) or {}
        return [self._parse(TrackDTO, item, response) for item in payload.get("tracks") or []]

    # --- playlists ---
    def create_playlist(
        self,
        access_token: str,
        user_id: str,
        name: str,
        public: bool = False,
    ) -> str:
        response = self._request(
            "POST",
            self._api(f"users/{user_id}/playlists"),
            access_token,
            json={"name": name, "public": public},
        )
        payload = self._json(response) or {}
        playlist_id = payload.get("id")
        if not playlist_id:
            raise SpotifyAPIError(response.status_code, "Playlist response missing id")
        return playlist_id

    def add_tracks_to_playlist(
        self,
        access_token: str,
        playlist_id: str,
        uris: Iterable[str],
    ) -> Optional[str]:
        response = self._request(
            "POST",
            self._api(f"playlists/{playlist_id}/tracks"),
            access_token,
            json={"uris": list(uris)},
        )
        payload = self._json(response) or {}
        return payload.get("snapshot_id")

    # --- player ---
    def get_devices(self, access_token: str) -> List[DeviceDTO]:
        response = self._request("GET", self._api("me/player/devices"), access_token)
        payload = self._json(response) or {}
        return [self._parse(DeviceDTO, item, response) for item in payload.get("devices") or []]

    def get_playback_state(self, access_token: str) -> Optional[PlaybackStateDTO]:
        """Return current playback, or None when Spotify reports nothing (204)."""
        response = self._request("GET", self._api("me/player"), access_token)
        payload = self._json(response)
        if not payload:
            return None
        return self._parse(PlaybackStateDTO, payload, response)

    def start_playback(self, access_token: str, device_id: Optional[str], uris: List[str]) -> None:
        params = {"device_id": device_id} if device_id else None
        self._request(
            "PUT",
            self._api("me/player/play"),
            access_token,
            params=params,
            json={"uris": list(uris)},
        )

    def add_to_queue(self, access_token: str, uri: str, device_id: Optional[str]) -> None:
        params = {"uri": uri}
        if device_id:
            params["device_id"] = device_id
        self._request("POST", self._api("me/player/queue"), access_token, params=params)


__all__ = [
    "LOGIN_SCOPE",
    "SpotifyAPIError",
    "SpotifyWebAPI",
]
