#!/usr/bin/env python
"""
Pydantic DTOs for the Spotify payloads this project touches.

Tracks, devices and playback state are parsed from Spotify Web API
responses; ``CreatePlaylistRequest`` validates the body posted to the
playlist proxy.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ArtistDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    id: Optional[str] = None


class TrackDTO(BaseModel):
    """A recommended track, kept verbatim from the Spotify response."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str
    artists: List[ArtistDTO] = Field(default_factory=list)
    uri: str
    external_urls: Dict[str, str] = Field(default_factory=dict)

    @property
    def artist_names(self) -> List[str]:
        return [artist.name for artist in self.artists]

    @property
    def web_url(self) -> Optional[str]:
        return self.external_urls.get("spotify")

    @property
    def display_label(self) -> str:
        return f"{self.name} by {', '.join(self.artist_names)}"

    @property
    def spotify_link(self) -> str:
        """Combined app/web link in the form ``spotify:<uri>,<web url>``."""
        return f"spotify:{self.uri},{self.web_url or ''}"


class TokenPair(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None


class UserProfileDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    display_name: Optional[str] = None


class DeviceDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    is_active: bool = False


class PlaybackStateDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    is_playing: bool = False
    device: Optional[DeviceDTO] = None
    item: Optional[Dict[str, Any]] = None


class CreatePlaylistRequest(BaseModel):
    """Body accepted by ``POST /create-playlist``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    access_token: str = Field(alias="accessToken", min_length=1)
    user_id: str = Field(alias="userId", min_length=1)
    name: str = Field(min_length=1)
    tracks: List[str] = Field(min_length=1)


__all__ = [
    "ArtistDTO",
    "TrackDTO",
    "TokenPair",
    "UserProfileDTO",
    "DeviceDTO",
    "PlaybackStateDTO",
    "CreatePlaylistRequest",
]
