import pytest
import requests
import spotipy

from src.core.errors import UpstreamError
from src.infrastructure.spotify import SpotifyGateway, build_oauth
from src.settings import load_app_settings
from tests.support.factories import TrackPayloadFactory
from tests.support.stubs import SpotipyStub, spotify_error


@pytest.mark.unit
def test_requires_token_or_client():
    with pytest.raises(ValueError):
        SpotifyGateway()


@pytest.mark.unit
def test_builds_bearer_client_without_retries():
    gateway = SpotifyGateway("user-token")
    assert isinstance(gateway.sp, spotipy.Spotify)
    assert gateway.sp._auth == "user-token"
    assert gateway.sp.retries == 0
    assert gateway.sp.status_retries == 0


@pytest.mark.unit
def test_top_track_ids_skips_empty_items():
    top = TrackPayloadFactory.create_batch(2)
    stub = SpotipyStub(top_tracks=[top[0], None, top[1]])
    assert SpotifyGateway(client=stub).top_track_ids() == [top[0]["id"], top[1]["id"]]


@pytest.mark.unit
def test_recommendations_drop_null_tracks():
    track = TrackPayloadFactory()
    stub = SpotipyStub(recommendations=[track, None])
    assert SpotifyGateway(client=stub).recommendations(seed_tracks=["a"], limit=5) == [track]


@pytest.mark.unit
def test_spotify_exception_is_wrapped():
    stub = SpotipyStub(errors={"current_user": spotify_error(401, "The access token expired")})
    with pytest.raises(UpstreamError) as excinfo:
        SpotifyGateway(client=stub).current_user()
    assert excinfo.value.service == "spotify"
    assert excinfo.value.action == "fetch current user"
    assert excinfo.value.status == 401


@pytest.mark.unit
def test_transport_error_is_wrapped():
    stub = SpotipyStub(errors={"audio_features": requests.exceptions.ConnectionError("reset")})
    with pytest.raises(UpstreamError) as excinfo:
        SpotifyGateway(client=stub).audio_features(["a"])
    assert excinfo.value.status is None


@pytest.mark.unit
def test_build_oauth_uses_settings_and_memory_cache():
    settings = load_app_settings({
        "spotify_client_id": "cid",
        "spotify_client_secret": "secret",
        "spotify_redirect_uri": "http://localhost:3000/callback",
    })
    oauth = build_oauth(settings)
    url = oauth.get_authorize_url(state="abc123")
    assert "client_id=cid" in url
    assert "state=abc123" in url
    assert "user-top-read" in url
    assert oauth.cache_handler.get_cached_token() is None
