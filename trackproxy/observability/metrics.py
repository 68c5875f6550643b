from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

TOKEN_EXCHANGES = Counter(
    "trackproxy_token_exchanges_total",
    "Total number of client-credential token exchanges sent to Spotify.",
)
SEARCH_REQUESTS = Counter(
    "trackproxy_search_requests_total",
    "Total number of track searches forwarded to Spotify.",
)
UPSTREAM_FAILURES = Counter(
    "trackproxy_upstream_failures_total",
    "Total number of failed calls to Spotify.",
    ["stage"],
)


def record_token_exchange() -> None:
    TOKEN_EXCHANGES.inc()


def record_search_request() -> None:
    SEARCH_REQUESTS.inc()


def record_upstream_failure(stage: str) -> None:
    UPSTREAM_FAILURES.labels(stage=stage).inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
