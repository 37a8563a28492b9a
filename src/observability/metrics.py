from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

TOKEN_EXCHANGES = Counter(
    "curator_token_exchange_total",
    "Authorization-code exchanges attempted against the Spotify accounts service.",
    ["outcome"],
)
PLAYLIST_REQUESTS = Counter(
    "curator_playlist_requests_total",
    "Playlist creation requests handled by the proxy, by outcome.",
    ["outcome"],
)

PLAYLIST_OUTCOMES = ("created", "invalid", "create_failed", "add_failed")


def record_token_exchange(success: bool) -> None:
    TOKEN_EXCHANGES.labels(outcome="success" if success else "failure").inc()


def record_playlist_outcome(outcome: str) -> None:
    if outcome not in PLAYLIST_OUTCOMES:
        raise ValueError(f"Unknown playlist outcome: {outcome}")
    PLAYLIST_REQUESTS.labels(outcome=outcome).inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
