"""Playlist creation domain."""

from .service import PlaylistService

__all__ = ["PlaylistService"]
