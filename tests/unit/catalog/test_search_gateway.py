import logging

import pytest
import requests

from tests.support import factories
from tests.support.stubs import FakeClock, FakeResponse, SpotifySessionStub
from trackproxy.domain.catalog import SearchGateway, TokenManager, build_query, clamp_limit
from trackproxy.errors import (
    BadRequestError,
    ConfigurationError,
    InternalError,
    UpstreamSearchError,
    UpstreamUnavailableError,
)
from trackproxy.utils.cache import TokenCache


def _gateway(session, clock=None, client_id="cid", client_secret="secret"):
    manager = TokenManager(
        TokenCache(clock=clock or FakeClock()),
        client_id=client_id,
        client_secret=client_secret,
        session=session,
    )
    return SearchGateway(manager, session=session, search_url="https://api.example/v1/search",
                         default_market="IN", timeout=4.0)


@pytest.mark.unit
@pytest.mark.parametrize(
    "query,lang,expected",
    [
        ("arijit", "hindi", "arijit Hindi song"),
        ("  arijit  ", "HINDI", "arijit Hindi song"),
        ("ilaiyaraaja", "Tamil", "ilaiyaraaja Tamil song"),
        ("coldplay", "klingon", "coldplay"),
        ("coldplay", "", "coldplay"),
        ("coldplay", None, "coldplay"),
        ("  yellow ", "english", "yellow English song"),
    ],
)
def test_build_query(query, lang, expected):
    result = build_query(query, lang)
    assert result == expected
    assert result == result.strip()
    assert "  " not in result


@pytest.mark.unit
@pytest.mark.parametrize(
    "limit,expected",
    [(None, 24), (0, 1), (-5, 1), (1, 1), (24, 24), (50, 50), (51, 50), (999, 50)],
)
def test_clamp_limit(limit, expected):
    assert clamp_limit(limit) == expected


@pytest.mark.unit
def test_search_sends_augmented_query_with_bearer_token():
    track = factories.TrackFactory()
    session = SpotifySessionStub(search_response=FakeResponse(200, factories.search_payload(track)))
    gateway = _gateway(session)

    result = gateway.search("arijit", language_hint="hindi", market="US", limit=10)

    assert result.normalized_query == "arijit Hindi song"
    assert [t.id for t in result.results] == [track["id"]]
    call = session.search_calls[0]
    assert call["url"] == "https://api.example/v1/search"
    assert call["params"] == {"q": "arijit Hindi song", "type": "track", "market": "US", "limit": "10"}
    assert call["headers"] == {"Authorization": "Bearer token-1"}
    assert call["timeout"] == 4.0


@pytest.mark.unit
def test_search_defaults_language_market_and_limit():
    session = SpotifySessionStub()
    gateway = _gateway(session)

    result = gateway.search("yellow")

    assert result.normalized_query == "yellow English song"
    params = session.search_calls[0]["params"]
    assert params["market"] == "IN"
    assert params["limit"] == "24"


@pytest.mark.unit
def test_blank_lang_and_market_fall_back_to_defaults():
    session = SpotifySessionStub()
    gateway = _gateway(session)

    result = gateway.search("yellow", language_hint="  ", market="")

    assert result.normalized_query == "yellow English song"
    assert session.search_calls[0]["params"]["market"] == "IN"


@pytest.mark.unit
def test_limit_is_clamped_before_forwarding():
    session = SpotifySessionStub()
    gateway = _gateway(session)

    gateway.search("a", limit=999)
    gateway.search("b", limit=0)

    assert [c["params"]["limit"] for c in session.search_calls] == ["50", "1"]


@pytest.mark.unit
@pytest.mark.parametrize("query", [None, "", "   "])
def test_missing_query_raises_bad_request_without_upstream_calls(query):
    session = SpotifySessionStub()
    gateway = _gateway(session)

    with pytest.raises(BadRequestError) as excinfo:
        gateway.search(query)

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Missing query parameter: q"
    assert session.token_calls == []
    assert session.search_calls == []


@pytest.mark.unit
def test_missing_credentials_raise_configuration_error_before_network(caplog):
    session = SpotifySessionStub()
    gateway = _gateway(session, client_id="", client_secret="")

    with caplog.at_level(logging.ERROR), pytest.raises(ConfigurationError) as excinfo:
        gateway.search("yellow")

    assert excinfo.value.message == "Server missing Spotify credentials (.env)"
    assert session.token_calls == []
    assert session.search_calls == []
    assert any("not configured" in rec.getMessage() for rec in caplog.records if rec.levelno == logging.ERROR)


@pytest.mark.unit
def test_two_searches_within_validity_exchange_token_once():
    session = SpotifySessionStub(expires_in=3600)
    clock = FakeClock()
    gateway = _gateway(session, clock=clock)

    gateway.search("one")
    clock.advance(60)
    gateway.search("two")

    assert len(session.token_calls) == 1
    assert len(session.search_calls) == 2


@pytest.mark.unit
def test_search_after_expiry_refreshes_token_once():
    session = SpotifySessionStub(expires_in=3600)
    clock = FakeClock()
    gateway = _gateway(session, clock=clock)

    gateway.search("one")
    clock.advance(3600 - 10)
    gateway.search("two")

    assert len(session.token_calls) == 2
    assert session.search_calls[1]["headers"]["Authorization"] == "Bearer token-2"


@pytest.mark.unit
def test_upstream_error_status_and_message_propagate():
    payload = {"error": {"status": 429, "message": "API rate limit exceeded"}}
    session = SpotifySessionStub(search_response=FakeResponse(429, payload))
    gateway = _gateway(session)

    with pytest.raises(UpstreamSearchError) as excinfo:
        gateway.search("yellow")

    err = excinfo.value
    assert err.status_code == 429
    assert err.message == "API rate limit exceeded"
    assert err.to_payload() == {"error": "API rate limit exceeded", "details": payload}
    assert len(session.search_calls) == 1


@pytest.mark.unit
def test_upstream_error_string_and_default_messages():
    session = SpotifySessionStub(search_response=FakeResponse(400, {"error": "invalid_request"}))
    with pytest.raises(UpstreamSearchError) as excinfo:
        _gateway(session).search("yellow")
    assert excinfo.value.message == "invalid_request"

    session = SpotifySessionStub(search_response=FakeResponse(503, None, text="upstream down"))
    with pytest.raises(UpstreamSearchError) as excinfo:
        _gateway(session).search("yellow")
    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Spotify search failed"
    assert excinfo.value.details == "upstream down"


@pytest.mark.unit
def test_transport_failure_raises_unavailable():
    session = SpotifySessionStub(search_error=requests.ConnectionError("refused"))
    gateway = _gateway(session)

    with pytest.raises(UpstreamUnavailableError):
        gateway.search("yellow")


@pytest.mark.unit
def test_malformed_success_payload_raises_internal_error():
    session = SpotifySessionStub(search_response=FakeResponse(200, {"tracks": {"items": "nope"}}))
    gateway = _gateway(session)

    with pytest.raises(InternalError):
        gateway.search("yellow")


@pytest.mark.unit
def test_null_items_and_missing_tracks_are_tolerated():
    track = factories.TrackFactory()
    session = SpotifySessionStub(search_response=FakeResponse(200, {"tracks": {"items": [None, track]}}))
    assert [t.id for t in _gateway(session).search("x").results] == [track["id"]]

    session = SpotifySessionStub(search_response=FakeResponse(200, {}))
    assert _gateway(session).search("x").results == []
