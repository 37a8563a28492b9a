"""Shared test stubs for the Spotify Web API and raw HTTP sessions."""

import json
from typing import Any, Dict, List, Optional

import requests

from src.clients.spotify_api import SpotifyAPIError
from src.models.dto import DeviceDTO, PlaybackStateDTO, TokenPair, TrackDTO, UserProfileDTO


def make_track(track_id: str, name: Optional[str] = None, artists=("Artist",)) -> TrackDTO:
    return TrackDTO.model_validate(
        {
            "id": track_id,
            "name": name or f"Track {track_id}",
            "artists": [{"name": artist} for artist in artists],
            "uri": f"spotify:track:{track_id}",
            "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        }
    )


class FakeResponse:
    """Just enough of ``requests.Response`` for the clients under test."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = json.dumps(payload)
        else:
            self.text = ""
        self.content = self.text.encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeHTTPSession:
    """Records ``request`` calls and replays queued responses in order."""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


class FakeSpotifyAPI:
    """Records calls made through the ``SpotifyWebAPI`` surface.

    Set ``fail[<method name>]`` to a ``SpotifyAPIError`` to make that call fail.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.fail: Dict[str, SpotifyAPIError] = {}
        self.tokens = TokenPair(access_token="A", refresh_token="R")
        self.profile_id = "user-1"
        self.pages: List[List[TrackDTO]] = []
        self.playlist_id = "pl-1"
        self.devices: List[DeviceDTO] = []
        self.playback_state: Optional[PlaybackStateDTO] = None

    def _record(self, name: str, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise self.fail[name]

    def called(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def authorize_url(self, client_id, redirect_uri, scope=None):
        from src.clients.spotify_api import SpotifyWebAPI

        return SpotifyWebAPI().authorize_url(client_id, redirect_uri)

    def exchange_code(self, code, client_id, client_secret, redirect_uri):
        self._record("exchange_code", code, client_id, client_secret, redirect_uri)
        return self.tokens

    def get_current_user(self, access_token):
        self._record("get_current_user", access_token)
        return UserProfileDTO(id=self.profile_id)

    def get_recommendations(self, access_token, seed_genres, limit=10, offset=0):
        self._record("get_recommendations", access_token, seed_genres, limit, offset)
        return self.pages.pop(0) if self.pages else []

    def create_playlist(self, access_token, user_id, name, public=False):
        self._record("create_playlist", access_token, user_id, name, public)
        return self.playlist_id

    def add_tracks_to_playlist(self, access_token, playlist_id, uris):
        self._record("add_tracks_to_playlist", access_token, playlist_id, list(uris))
        return "snap-1"

    def get_devices(self, access_token):
        self._record("get_devices", access_token)
        return list(self.devices)

    def get_playback_state(self, access_token):
        self._record("get_playback_state", access_token)
        return self.playback_state

    def start_playback(self, access_token, device_id, uris):
        self._record("start_playback", access_token, device_id, list(uris))

    def add_to_queue(self, access_token, uri, device_id):
        self._record("add_to_queue", access_token, uri, device_id)


class FakeBackend:
    def __init__(self, reply: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.reply = reply if reply is not None else {"success": True, "playlistId": "pl-1"}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def create_playlist(self, access_token, user_id, name, track_uris):
        self.calls.append(
            {"access_token": access_token, "user_id": user_id, "name": name, "track_uris": list(track_uris)}
        )
        if self.error is not None:
            raise self.error
        return self.reply
