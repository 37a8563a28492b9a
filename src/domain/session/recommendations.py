#!/usr/bin/env python
"""In-memory curation session driven by the user's access token.

Holds what the browser view kept in component state: the token and
derived user id, the candidate page, the kept list and per-genre
pagination offsets. Network failures never raise out of the public
operations; they land in ``error`` as a short user-facing message.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

from src.clients.backend import BackendError, CuratorBackendClient
from src.clients.spotify_api import SpotifyAPIError, SpotifyWebAPI
from src.domain.playback import PlaybackController, PlaybackOutcome
from src.models.dto import TrackDTO

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

DEFAULT_GENRES = [
    "pop", "hip-hop", "jazz", "rock", "edm", "country", "k-pop", "rap", "r&b", "acoustic",
]

GENRE_SEEDS = {
    "rap": "hip-hop",
    "r&b": "r-n-b",
}

PROFILE_ERROR = "Failed to fetch user profile. Please try logging in again."
FETCH_ERROR = "Failed to fetch tracks. Please try again."
SAVE_PRECONDITION_ERROR = (
    "Please enter a playlist name and keep at least one track before saving."
)
SAVE_ERROR = "Failed to save playlist. Please try again."


def get_genre_seed(genre: str) -> str:
    """Translate a display genre into Spotify's seed vocabulary."""
    return GENRE_SEEDS.get(genre.lower(), genre)


def _query_params(url_or_query: str) -> Dict[str, str]:
    raw = url_or_query or ""
    query = urlsplit(raw).query if "?" in raw else raw.lstrip("?")
    return {key: values[0] for key, values in parse_qs(query).items() if values}


class RecommendationSession:
    def __init__(
        self,
        api: SpotifyWebAPI,
        backend: Optional[CuratorBackendClient] = None,
        playback: Optional[PlaybackController] = None,
    ):
        self.api = api
        self.backend = backend or CuratorBackendClient()
        self.playback = playback or PlaybackController(api)

        self.token = ""
        self.refresh_token: Optional[str] = None
        self.user_id = ""
        self.selected_genre = ""
        self.tracks: List[TrackDTO] = []
        self.kept_tracks: List[TrackDTO] = []
        self.offsets: Dict[str, int] = {}
        self.error: Optional[str] = None
        self.loading = False
        self.playlist_name = ""
        self.is_playing = False
        self.currently_playing: Optional[TrackDTO] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    # --- authentication ---
    def authenticate_from_redirect(self, url_or_query: str) -> bool:
        """Pick up tokens (or an error) from the post-login redirect."""
        params = _query_params(url_or_query)
        error = params.get("error")
        if error:
            logger.error("Authentication error: %s", error)
            self.error = f"Authentication error: {error}"
            return False

        access_token = params.get("access_token")
        if not access_token:
            return False
        self.token = access_token
        self.refresh_token = params.get("refresh_token")
        self.fetch_user_profile()
        return True

    def fetch_user_profile(self) -> Optional[str]:
        try:
            profile = self.api.get_current_user(self.token)
        except SpotifyAPIError as exc:
            logger.error("Error fetching user profile: %s (details=%s)", exc, exc.details)
            self.error = PROFILE_ERROR
            return None
        self.user_id = profile.id
        return self.user_id

    # --- recommendations ---
    def fetch_tracks(self, genre: str) -> Optional[List[TrackDTO]]:
        if not self.token:
            return None
        self.loading = True
        self.error = None
        current_offset = self.offsets.get(genre, 0)
        try:
            tracks = self.api.get_recommendations(
                self.token,
                seed_genres=get_genre_seed(genre),
                limit=PAGE_SIZE,
                offset=current_offset,
            )
        except SpotifyAPIError as exc:
            logger.error("Error fetching tracks: %s (details=%s)", exc, exc.details)
            self.error = FETCH_ERROR
            return None
        finally:
            self.loading = False

        self.tracks = list(tracks)
        # Advance by a full page even when Spotify returned fewer tracks
        self.offsets[genre] = current_offset + PAGE_SIZE
        return self.tracks

    def select_genre(self, genre: str) -> Optional[List[TrackDTO]]:
        self.selected_genre = genre
        return self.fetch_tracks(genre)

    # --- curation ---
    def keep_track(self, track: TrackDTO) -> None:
        if all(kept.id != track.id for kept in self.kept_tracks):
            self.kept_tracks.append(track)
        self.tracks = [t for t in self.tracks if t.id != track.id]

    def remove_track(self, track_id: str) -> None:
        self.tracks = [t for t in self.tracks if t.id != track_id]
        self.kept_tracks = [t for t in self.kept_tracks if t.id != track_id]

    def reset_selections(self) -> None:
        self.selected_genre = ""
        self.tracks = []
        self.kept_tracks = []
        self.error = None
        self.offsets = {}

    # --- persistence via backend ---
    def save_playlist(self, name: Optional[str] = None) -> Optional[str]:
        """Submit the kept tracks as a new playlist; returns its id on success."""
        if name is not None:
            self.playlist_name = name
        if (
            not self.token
            or not self.user_id
            or not self.kept_tracks
            or not self.playlist_name.strip()
        ):
            self.error = SAVE_PRECONDITION_ERROR
            return None

        logger.info(
            "Attempting to save playlist: user=%s name=%s tracks=%d",
            self.user_id, self.playlist_name, len(self.kept_tracks),
        )
        try:
            reply = self.backend.create_playlist(
                access_token=self.token,
                user_id=self.user_id,
                name=self.playlist_name,
                track_uris=[track.uri for track in self.kept_tracks],
            )
        except BackendError as exc:
            logger.error("Error saving playlist: %s (details=%s)", exc, exc.details)
            self.error = SAVE_ERROR
            return None

        if not reply.get("success"):
            logger.error("Server indicated failure: %s", reply)
            self.error = SAVE_ERROR
            return None

        self.playlist_name = ""
        self.kept_tracks = []
        return reply.get("playlistId")

    # --- playback ---
    def play_track(self, track: TrackDTO) -> PlaybackOutcome:
        outcome = self.playback.handle_track_selection(self.token, track)
        if outcome.message:
            self.error = outcome.message
        if outcome.now_playing:
            self.is_playing = True
            self.currently_playing = track
        return outcome


__all__ = [
    "DEFAULT_GENRES",
    "GENRE_SEEDS",
    "PAGE_SIZE",
    "RecommendationSession",
    "get_genre_seed",
]
