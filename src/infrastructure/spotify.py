"""Spotify Web API access on behalf of the signed-in user."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth

from src.core.errors import UpstreamError

logger = logging.getLogger(__name__)

# Upstream caps per request
MAX_SEEDS = 5
MAX_RECOMMENDATIONS = 100
MAX_ITEMS_PER_ADD = 100


class SpotifyGateway:
    """Per-request wrapper around a bearer-token spotipy client.

    Retries are disabled: every failure surfaces immediately as an
    UpstreamError and the original detail stays in the server log.
    """

    def __init__(self, access_token: Optional[str] = None, *, client: Optional[spotipy.Spotify] = None) -> None:
        if client is None:
            if not access_token:
                raise ValueError("access_token or client is required")
            client = spotipy.Spotify(auth=access_token, retries=0, status_retries=0)
        self.sp = client

    def _call(self, action: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except SpotifyException as exc:
            logger.error('Spotify API call failed during %s: %s', action, exc, exc_info=True)
            raise UpstreamError('spotify', action, status=exc.http_status, detail=str(exc.msg)) from exc
        except requests.exceptions.RequestException as exc:
            logger.error('Spotify transport error during %s: %s', action, exc, exc_info=True)
            raise UpstreamError('spotify', action, detail=str(exc)) from exc

    def top_track_ids(self, limit: int = MAX_SEEDS, time_range: str = 'medium_term') -> List[str]:
        data = self._call(
            'fetch top tracks',
            lambda: self.sp.current_user_top_tracks(limit=limit, time_range=time_range),
        )
        items = (data or {}).get('items') or []
        return [item['id'] for item in items[:limit] if item and item.get('id')]

    def recommendations(
        self,
        *,
        seed_tracks: Sequence[str],
        seed_genres: Sequence[str] = (),
        limit: int,
        **tunables: Any,
    ) -> List[Dict[str, Any]]:
        data = self._call(
            'fetch recommendations',
            lambda: self.sp.recommendations(
                seed_tracks=list(seed_tracks) or None,
                seed_genres=list(seed_genres) or None,
                limit=limit,
                **tunables,
            ),
        )
        return [track for track in ((data or {}).get('tracks') or []) if track]

    def audio_features(self, track_ids: Sequence[str]) -> List[Optional[Dict[str, Any]]]:
        """Return one entry per requested id, ``None`` where upstream has no data."""
        data = self._call('fetch audio features', lambda: self.sp.audio_features(list(track_ids)))
        return list(data or [])

    def current_user(self) -> Dict[str, Any]:
        return self._call('fetch current user', self.sp.current_user) or {}

    def create_playlist(self, user_id: str, name: str, *, public: bool = True, description: str = '') -> Dict[str, Any]:
        return self._call(
            'create playlist',
            lambda: self.sp.user_playlist_create(user_id, name, public=public, description=description),
        )

    def add_items(self, playlist_id: str, uris: Sequence[str]) -> None:
        uris = list(uris)
        for start in range(0, len(uris), MAX_ITEMS_PER_ADD):
            chunk = uris[start:start + MAX_ITEMS_PER_ADD]
            self._call('add playlist items', lambda: self.sp.playlist_add_items(playlist_id, chunk))


def build_oauth(settings, state: Optional[str] = None) -> SpotifyOAuth:
    """Authorization-code helper; tokens are handed to the browser, never cached server-side."""
    return SpotifyOAuth(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
        redirect_uri=settings.spotify_redirect_uri,
        scope=settings.spotify_scope,
        state=state,
        cache_handler=MemoryCacheHandler(),
        open_browser=False,
    )


__all__ = [
    "MAX_SEEDS",
    "MAX_RECOMMENDATIONS",
    "MAX_ITEMS_PER_ADD",
    "SpotifyGateway",
    "build_oauth",
]
