"""Route blueprints exposed via Flask."""

from .auth import auth_bp
from .config import config_bp
from .health import health_bp
from .playlist import playlist_bp
from .search import search_bp

__all__ = [
    "auth_bp",
    "config_bp",
    "health_bp",
    "playlist_bp",
    "search_bp",
]
