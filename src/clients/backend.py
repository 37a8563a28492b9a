#!/usr/bin/env python
"""HTTP client for the curator backend's playlist proxy."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from config import Config

logger = logging.getLogger(__name__)


class BackendError(Exception):
    def __init__(self, status_code: Optional[int], details: Any = None):
        self.status_code = status_code
        self.details = details
        super().__init__(f"Backend request failed (status={status_code})")


class CuratorBackendClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or Config.BACKEND_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def login_url(self) -> str:
        return f"{self.base_url}/login"

    def create_playlist(
        self,
        access_token: str,
        user_id: str,
        name: str,
        track_uris: List[str],
    ) -> Dict[str, Any]:
        """POST the playlist draft to ``/create-playlist`` and return the JSON reply."""
        try:
            response = self.session.request(
                "POST",
                f"{self.base_url}/create-playlist",
                json={
                    "accessToken": access_token,
                    "userId": user_id,
                    "name": name,
                    "tracks": list(track_uris),
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("POST /create-playlist failed: %s", exc.__class__.__name__)
            raise BackendError(None, str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {"error": response.text}
        if not response.ok:
            raise BackendError(response.status_code, payload)
        return payload


__all__ = ["BackendError", "CuratorBackendClient"]
