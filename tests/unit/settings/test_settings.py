import importlib
import os
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st


def _reload_settings():
    import config as _config
    importlib.reload(_config)
    import src.settings as settings
    importlib.reload(settings)
    return _config, settings


@pytest.fixture(autouse=True)
def _restore_config(monkeypatch):
    yield
    monkeypatch.undo()
    _reload_settings()


@pytest.mark.unit
def test_env_precedence_for_core_fields(monkeypatch):
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "cid")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "csec")
    monkeypatch.setenv("SPOTIPY_REDIRECT_URI", "http://example.test/callback")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("PROMPT_MODEL", "gpt-test")
    monkeypatch.setenv("PLAYLIST_PUBLIC", "false")

    _config, settings = _reload_settings()
    s = settings.load_app_settings()

    assert s.spotify_client_id == _config.Config.SPOTIPY_CLIENT_ID == "cid"
    assert s.spotify_client_secret == "csec"
    assert s.spotify_redirect_uri == "http://example.test/callback"
    assert s.openai_api_key == "sk-test"
    assert s.prompt_model == "gpt-test"
    assert s.playlist_public is False
    assert s.oauth_configured is True
    assert s.prompt_parsing_enabled is True


@pytest.mark.unit
def test_legacy_env_names_are_honoured(monkeypatch):
    monkeypatch.delenv("SPOTIPY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIPY_REDIRECT_URI", raising=False)
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "legacy-id")
    monkeypatch.setenv("REDIRECT_URI", "http://legacy/callback")

    _config, settings = _reload_settings()

    assert _config.Config.SPOTIPY_CLIENT_ID == "legacy-id"
    assert settings.load_app_settings().spotify_redirect_uri == "http://legacy/callback"


@pytest.mark.unit
def test_missing_credentials_disable_features():
    import src.settings as settings
    s = settings.load_app_settings({"spotify_client_secret": None, "openai_api_key": ""})
    assert s.oauth_configured is False
    assert s.prompt_parsing_enabled is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [(0, 1), (-5, 1), (10, 10), (500, 50), ("25", 25), ("many", 50), (None, 50), (float("inf"), 50)],
)
def test_limits_are_coerced(value, expected):
    import src.settings as settings
    s = settings.AppSettings(bpm_search_default_limit=value)
    assert s.bpm_search_default_limit == expected


@pytest.mark.unit
@pytest.mark.parametrize("value", ["many", None, ""])
def test_unusable_limits_fall_back_to_field_defaults(value):
    import src.settings as settings
    s = settings.AppSettings(bpm_search_default_limit=value, prompt_search_default_limit=value)
    assert s.bpm_search_default_limit == 50
    assert s.prompt_search_default_limit == 10


@pytest.mark.unit
def test_cors_origins_drop_wildcards_and_duplicates():
    import src.settings as settings
    s = settings.AppSettings(cors_allowed_origins="http://a.test/, *, http://a.test,http://b.test")
    assert s.cors_allowed_origins == ["http://a.test", "http://b.test"]


@pytest.mark.unit
@given(
    search_limit=st.integers(min_value=1, max_value=50),
    public=st.sampled_from(["1", "0", "true", "false"]),
)
def test_property_based_env_permutations(search_limit, public):
    with patch.dict(os.environ, {
        "PROMPT_SEARCH_DEFAULT_LIMIT": str(search_limit),
        "PLAYLIST_PUBLIC": public,
    }, clear=False):
        _config, settings = _reload_settings()
        s = settings.load_app_settings()
        assert s.prompt_search_default_limit == search_limit
        assert s.playlist_public is (public in {"1", "true"})
