#!/usr/bin/env python
"""Play-or-queue handling for a selected track."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from src.clients.spotify_api import SpotifyAPIError, SpotifyWebAPI
from src.models.dto import DeviceDTO, TrackDTO

logger = logging.getLogger(__name__)

NO_DEVICES_MESSAGE = (
    "No active Spotify devices found. Please open Spotify on any device and try again."
)
PREMIUM_REQUIRED_MESSAGE = (
    "Unable to control playback. Make sure you have an active Spotify Premium account."
)
NO_ACTIVE_DEVICE_MESSAGE = (
    "No active device found. Please start playing Spotify on any device and try again."
)
PLAYBACK_FAILED_MESSAGE = (
    "Failed to play or queue the track. Please try again or refresh the page."
)

ACTION_PLAYED = "played"
ACTION_QUEUED = "queued"
ACTION_NO_DEVICES = "no_devices"
ACTION_FAILED = "failed"


@dataclass(frozen=True)
class PlaybackOutcome:
    action: str
    track: Optional[TrackDTO] = None
    device_id: Optional[str] = None
    message: Optional[str] = None

    @property
    def now_playing(self) -> bool:
        return self.action == ACTION_PLAYED

    @property
    def ok(self) -> bool:
        return self.action in (ACTION_PLAYED, ACTION_QUEUED)


def choose_device(devices: List[DeviceDTO]) -> Optional[DeviceDTO]:
    """Prefer the device Spotify flags active, else the first one listed."""
    if not devices:
        return None
    return next((device for device in devices if device.is_active), devices[0])


def describe_playback_error(exc: Exception) -> str:
    status = getattr(exc, "status_code", None)
    if status == 403:
        return PREMIUM_REQUIRED_MESSAGE
    if status == 404:
        return NO_ACTIVE_DEVICE_MESSAGE
    return PLAYBACK_FAILED_MESSAGE


class PlaybackController:
    def __init__(self, api: SpotifyWebAPI):
        self.api = api

    def handle_track_selection(self, access_token: str, track: TrackDTO) -> PlaybackOutcome:
        """Start ``track`` now when idle, otherwise append it to the queue.

        Never raises: every failure is turned into a user-facing message on
        the returned outcome.
        """
        try:
            devices = self.api.get_devices(access_token)
            device = choose_device(devices)
            if device is None:
                return PlaybackOutcome(ACTION_NO_DEVICES, track=track, message=NO_DEVICES_MESSAGE)

            state = self.api.get_playback_state(access_token)
            if state is None or not state.is_playing:
                self.api.start_playback(access_token, device.id, [track.uri])
                logger.info("Started playback of %s on device %s", track.id, device.id)
                return PlaybackOutcome(ACTION_PLAYED, track=track, device_id=device.id)

            self.api.add_to_queue(access_token, track.uri, device.id)
            logger.info("Queued %s on device %s", track.id, device.id)
            return PlaybackOutcome(ACTION_QUEUED, track=track, device_id=device.id)
        except SpotifyAPIError as exc:
            logger.error("Error handling track selection: %s (details=%s)", exc, exc.details)
            return PlaybackOutcome(ACTION_FAILED, track=track, message=describe_playback_error(exc))


__all__ = [
    "ACTION_FAILED",
    "ACTION_NO_DEVICES",
    "ACTION_PLAYED",
    "ACTION_QUEUED",
    "NO_ACTIVE_DEVICE_MESSAGE",
    "NO_DEVICES_MESSAGE",
    "PLAYBACK_FAILED_MESSAGE",
    "PREMIUM_REQUIRED_MESSAGE",
    "PlaybackController",
    "PlaybackOutcome",
    "choose_device",
    "describe_playback_error",
]
