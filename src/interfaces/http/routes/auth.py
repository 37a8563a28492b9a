#!/usr/bin/env python
"""Spotify authorization-code handshake: ``/login`` and ``/callback``."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from flask import Blueprint, Response, current_app, redirect, request

from src.clients.spotify_api import SpotifyAPIError
from src.observability.metrics import record_token_exchange

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _client_app_redirect(params: dict) -> Response:
    base = current_app.extensions["app_settings"].client_app_url
    separator = "&" if "?" in base else "?"
    return redirect(f"{base}{separator}{urlencode(params)}")


@auth_bp.route("/login", methods=["GET"])
def login():
    settings = current_app.extensions["app_settings"]
    api = current_app.extensions["spotify_api"]
    return redirect(api.authorize_url(settings.spotify_client_id, settings.redirect_uri))


@auth_bp.route("/callback", methods=["GET"])
def callback():
    code = request.args.get("code")
    denied = request.args.get("error")
    if denied and not code:
        # Spotify reports a refused consent here; let the client surface it
        logger.warning("Authorization denied by Spotify: %s", denied)
        return _client_app_redirect({"error": denied})

    settings = current_app.extensions["app_settings"]
    api = current_app.extensions["spotify_api"]
    try:
        tokens = api.exchange_code(
            code,
            client_id=settings.spotify_client_id,
            client_secret=settings.spotify_client_secret,
            redirect_uri=settings.redirect_uri,
        )
    except SpotifyAPIError as exc:
        logger.error("Error during authentication: %s (details=%s)", exc, exc.details)
        record_token_exchange(False)
        return Response("Error during authentication", status=500, mimetype="text/plain")

    record_token_exchange(True)
    # Tokens travel to the browser in the query string and end up in history
    return _client_app_redirect(
        {
            "access_token": tokens.access_token,
            "refresh_token": tokens.refresh_token or "",
        }
    )


__all__ = ["auth_bp"]
