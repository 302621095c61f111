#!/usr/bin/env python
"""
Centralized configuration schema.

Merges defaults from config.Config with optional runtime overrides and
validates them before the app wires its services.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from config import Config

# Upper bound accepted for any requested result size
MAX_RESULT_LIMIT = 50


def _parse_origins(value: Optional[object]) -> List[str]:
    """Normalize CORS origin configuration into a unique ordered list without wildcards."""
    if value is None:
        tokens: List[str] = []
    elif isinstance(value, str):
        tokens = [token.strip() for token in value.split(",")]
    elif isinstance(value, (list, tuple, set)):
        tokens = [str(token).strip() for token in value]
    else:
        tokens = [str(value).strip()]

    normalized: List[str] = []
    for token in tokens:
        if not token or token == "*":
            continue
        token = token.rstrip("/")
        if token not in normalized:
            normalized.append(token)
    return normalized


class AppSettings(BaseModel):
    """Application-wide settings."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_redirect_uri: str = "http://localhost:3000/callback"
    spotify_scope: str = "playlist-modify-public playlist-modify-private user-top-read"

    # Language model
    openai_api_key: Optional[str] = None
    prompt_model: str = "gpt-4o-mini"

    # Search behaviour
    bpm_search_default_limit: int = 50
    prompt_search_default_limit: int = 10

    # Playlist creation
    playlist_description: str = ""
    playlist_public: bool = True

    cors_allowed_origins: List[str] = Field(default_factory=list)

    @field_validator("bpm_search_default_limit", "prompt_search_default_limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: object, info: ValidationInfo) -> int:
        default = cls.model_fields[info.field_name].default
        try:
            limit = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return default
        return max(1, min(limit, MAX_RESULT_LIMIT))

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _normalize_origins(cls, value: Optional[object]) -> List[str]:
        return _parse_origins(value)

    @field_validator("playlist_public", mode="before")
    @classmethod
    def _coerce_public(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
        return bool(value)

    @property
    def oauth_configured(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def prompt_parsing_enabled(self) -> bool:
        return bool(self.openai_api_key)


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIPY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIPY_CLIENT_SECRET,
        "spotify_redirect_uri": Config.SPOTIPY_REDIRECT_URI,
        "spotify_scope": Config.SPOTIFY_SCOPE,
        "openai_api_key": Config.OPENAI_API_KEY,
        "prompt_model": Config.PROMPT_MODEL,
        "bpm_search_default_limit": Config.BPM_SEARCH_DEFAULT_LIMIT,
        "prompt_search_default_limit": Config.PROMPT_SEARCH_DEFAULT_LIMIT,
        "playlist_description": Config.PLAYLIST_DESCRIPTION,
        "playlist_public": Config.PLAYLIST_PUBLIC,
        "cors_allowed_origins": Config.CORS_ALLOWED_ORIGINS,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "MAX_RESULT_LIMIT",
    "load_app_settings",
]
