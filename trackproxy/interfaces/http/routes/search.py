import logging
import re
from typing import Optional

from flask import Blueprint, current_app, jsonify, request

logger = logging.getLogger(__name__)

search_bp = Blueprint('search_bp', __name__, url_prefix='/api')

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_search_gateway():
    return current_app.extensions['search_gateway']


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    """Read the leading integer of ``raw`` ("12abc" -> 12, "3.7" -> 3)."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        # Non-numeric limits fall back to the default page size
        return None
    return int(match.group(1))


@search_bp.route('/search', methods=['GET'])
def search_tracks_api():
    """Search Spotify tracks; errors are rendered by the app-level handlers."""
    gateway = get_search_gateway()
    result = gateway.search(
        request.args.get('q'),
        language_hint=request.args.get('lang'),
        market=request.args.get('market'),
        limit=_parse_limit(request.args.get('limit')),
    )
    return jsonify(result.to_response())
