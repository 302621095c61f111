#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'bpm-playlist-dev-secret'

    # Spotify API (authorization-code flow on behalf of the signed-in user)
    SPOTIPY_CLIENT_ID = os.environ.get('SPOTIPY_CLIENT_ID') or os.environ.get('SPOTIFY_CLIENT_ID')
    SPOTIPY_CLIENT_SECRET = os.environ.get('SPOTIPY_CLIENT_SECRET') or os.environ.get('SPOTIFY_CLIENT_SECRET')
    SPOTIPY_REDIRECT_URI = (
        os.environ.get('SPOTIPY_REDIRECT_URI')
        or os.environ.get('REDIRECT_URI')
        or 'http://localhost:3000/callback'
    )
    SPOTIFY_SCOPE = os.getenv(
        'SPOTIFY_SCOPE',
        'playlist-modify-public playlist-modify-private user-top-read',
    )

    # Language model used to turn free-text prompts into search criteria
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
    PROMPT_MODEL = os.getenv('PROMPT_MODEL', 'gpt-4o-mini')

    # Search defaults
    BPM_SEARCH_DEFAULT_LIMIT = _get_int('BPM_SEARCH_DEFAULT_LIMIT', 50)
    PROMPT_SEARCH_DEFAULT_LIMIT = _get_int('PROMPT_SEARCH_DEFAULT_LIMIT', 10)

    # Playlists created on the user's account
    PLAYLIST_DESCRIPTION = os.getenv('PLAYLIST_DESCRIPTION', 'Created with BPM Playlist Generator')
    PLAYLIST_PUBLIC = _get_bool('PLAYLIST_PUBLIC', True)

    # Comma-separated origins allowed to call /api/*
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    PORT = _get_int('PORT', 3000)

    STATIC_DIR = os.getenv('STATIC_DIR', os.path.join(basedir, 'static'))
    LOG_DIR = os.getenv('LOG_DIR', os.path.join(basedir, 'logs'))
