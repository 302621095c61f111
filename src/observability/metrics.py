from __future__ import annotations

from typing import Optional

from flask import Blueprint, Response
from prometheus_client import Counter, Histogram, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

TRACK_SEARCHES = Counter(
    "bpmplaylist_track_searches_total",
    "Total number of track searches received by the API.",
    ["mode"],
)
TRACKS_RETURNED = Histogram(
    "bpmplaylist_tracks_returned",
    "Number of tracks returned per search after tempo filtering.",
    buckets=(0, 1, 5, 10, 20, 30, 50, float("inf")),
)
PLAYLISTS_CREATED = Counter(
    "bpmplaylist_playlists_created_total",
    "Total number of playlists created on user accounts.",
)
UPSTREAM_FAILURES = Counter(
    "bpmplaylist_upstream_failures_total",
    "Total number of failed calls to third-party services.",
    ["service"],
)
PROMPT_PARSE_FAILURES = Counter(
    "bpmplaylist_prompt_parse_failures_total",
    "Total number of language model responses without a usable JSON object.",
)


def record_search(mode: str, returned: Optional[int] = None) -> None:
    TRACK_SEARCHES.labels(mode=mode).inc()
    if returned is not None:
        TRACKS_RETURNED.observe(returned)


def record_playlist_created() -> None:
    PLAYLISTS_CREATED.inc()


def record_upstream_failure(service: str) -> None:
    UPSTREAM_FAILURES.labels(service=service).inc()


def record_prompt_parse_failure() -> None:
    PROMPT_PARSE_FAILURES.inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
