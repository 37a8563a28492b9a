"""Playback control for selected tracks."""

from .controller import (
    PlaybackController,
    PlaybackOutcome,
    choose_device,
    describe_playback_error,
)

__all__ = [
    "PlaybackController",
    "PlaybackOutcome",
    "choose_device",
    "describe_playback_error",
]
