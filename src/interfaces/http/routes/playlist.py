"""Playlist proxy: create a private playlist and fill it in one batch."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from src.clients.spotify_api import SpotifyAPIError
from src.models.dto import CreatePlaylistRequest
from src.observability.metrics import record_playlist_outcome

logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__)


def _failure(exc: SpotifyAPIError, **extra):
    details = exc.details if exc.details is not None else str(exc)
    if extra:
        details = {'upstream': details, **extra}
    return jsonify({'error': 'Failed to create playlist', 'details': details}), 500


@playlist_bp.route('/create-playlist', methods=['POST'])
def create_playlist():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    try:
        draft = CreatePlaylistRequest.model_validate(payload)
    except ValidationError:
        tracks = payload.get('tracks')
        logger.error(
            'Invalid request data: userId=%s name=%s trackCount=%d',
            payload.get('userId'),
            payload.get('name'),
            len(tracks) if isinstance(tracks, list) else 0,
        )
        record_playlist_outcome('invalid')
        return jsonify({'error': 'Invalid request data'}), 400

    api = current_app.extensions['spotify_api']
    logger.info(
        'Creating playlist: userId=%s name=%s trackCount=%d',
        draft.user_id, draft.name, len(draft.tracks),
    )

    try:
        playlist_id = api.create_playlist(draft.access_token, draft.user_id, draft.name, public=False)
    except SpotifyAPIError as exc:
        logger.error('Error creating playlist: %s (details=%s)', exc, exc.details)
        record_playlist_outcome('create_failed')
        return _failure(exc)
    logger.info('Playlist created: %s', playlist_id)

    try:
        api.add_tracks_to_playlist(draft.access_token, playlist_id, draft.tracks)
    except SpotifyAPIError as exc:
        # The empty playlist stays behind; no compensating delete
        logger.error(
            'Error adding tracks to playlist %s: %s (details=%s)', playlist_id, exc, exc.details
        )
        record_playlist_outcome('add_failed')
        return _failure(exc, playlistId=playlist_id)

    logger.info('Tracks added to playlist %s', playlist_id)
    record_playlist_outcome('created')
    return jsonify({'success': True, 'playlistId': playlist_id}), 200


__all__ = ['playlist_bp']
