import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'trackproxy' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs
from tests.support.stubs import TEST_CONFIG
from trackproxy.utils.cache import TokenCache


@pytest.fixture
def fake_clock():
    return test_stubs.FakeClock()


@pytest.fixture
def token_cache(fake_clock):
    return TokenCache(clock=fake_clock)


@pytest.fixture
def spotify_session():
    """Expose the session stub so tests can customise upstream behaviour."""
    return test_stubs.SpotifySessionStub()


@pytest.fixture
def app(spotify_session, token_cache):
    import app as app_module

    application = app_module.create_app(
        config_overrides=dict(TEST_CONFIG),
        http_session=spotify_session,
        token_cache=token_cache,
    )
    yield application


@pytest.fixture
def unconfigured_app(spotify_session, token_cache):
    import app as app_module

    overrides = dict(TEST_CONFIG, SPOTIFY_CLIENT_ID="", SPOTIFY_CLIENT_SECRET="")
    return app_module.create_app(
        config_overrides=overrides,
        http_session=spotify_session,
        token_cache=token_cache,
    )


@pytest.fixture
def client(app):
    return app.test_client()
