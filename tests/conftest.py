import os
import sys

import pytest
from hypothesis import HealthCheck, settings

# The autouse env fixture is function-scoped but only sets constant values.
settings.register_profile("playlist", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("playlist")

# Ensure project root is on sys.path so 'app', 'config', and 'src' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories
from tests.support import stubs as test_stubs


TEST_SETTINGS = {
    "spotify_client_id": "test-client-id",
    "spotify_client_secret": "test-client-secret",
    "spotify_redirect_uri": "http://localhost:3000/callback",
    "openai_api_key": None,
    "cors_allowed_origins": ["http://localhost:3000"],
}


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep real credentials out of the test process."""
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "test-client-secret")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    yield


@pytest.fixture
def spotipy_stub():
    return test_stubs.SpotipyStub(top_tracks=test_factories.TrackPayloadFactory.create_batch(5))


@pytest.fixture
def chat_client():
    return test_stubs.ChatClientStub()


@pytest.fixture
def gateway(spotipy_stub):
    from src.infrastructure.spotify import SpotifyGateway

    return SpotifyGateway(client=spotipy_stub)


@pytest.fixture
def app(spotipy_stub, chat_client):
    import app as app_module
    from src.domain.criteria import PromptInterpreter
    from src.infrastructure.spotify import SpotifyGateway

    tokens = []

    def _gateway_factory(access_token):
        tokens.append(access_token)
        return SpotifyGateway(client=spotipy_stub)

    application = app_module.create_app(
        TEST_SETTINGS,
        gateway_factory=_gateway_factory,
        prompt_interpreter=PromptInterpreter(chat_client, model="test-model"),
    )
    application.config["TESTING"] = True
    application.extensions["seen_tokens"] = tokens
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def factories():
    yield test_factories
