"""Create a playlist on the signed-in user's account."""

from __future__ import annotations

import logging
from typing import Sequence

from src.models.dto import PlaylistDTO

logger = logging.getLogger(__name__)


class PlaylistService:
    """Profile lookup, playlist creation and item insertion, in that order.

    A failure at any step propagates as-is; a playlist created before a
    failed insert is not reported separately.
    """

    def __init__(self, gateway, *, description: str = "", public: bool = True) -> None:
        self.gateway = gateway
        self.description = description
        self.public = public

    def create(self, name: str, track_uris: Sequence[str]) -> PlaylistDTO:
        user = self.gateway.current_user()
        user_id = user.get("id")
        playlist = self.gateway.create_playlist(
            user_id,
            name,
            public=self.public,
            description=self.description,
        )
        playlist_id = playlist["id"]
        if track_uris:
            self.gateway.add_items(playlist_id, track_uris)
        logger.info("Created playlist %s with %d tracks for user %s", playlist_id, len(track_uris), user_id)
        return PlaylistDTO(
            id=playlist_id,
            name=playlist.get("name") or name,
            url=(playlist.get("external_urls") or {}).get("spotify"),
        )


__all__ = ["PlaylistService"]
