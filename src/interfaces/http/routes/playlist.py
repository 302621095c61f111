"""Playlist creation on the signed-in user's Spotify account."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from src.auth import token_required
from src.core.errors import UpstreamError
from src.domain.playlists import PlaylistService
from src.observability.metrics import record_playlist_created, record_upstream_failure


logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api')


def _normalize_uris(value) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [str(uri).strip() for uri in value if isinstance(uri, str) and uri.strip()]


@playlist_bp.route('/create-playlist', methods=['POST'])
@token_required
def create_playlist(access_token: str):
    payload = request.get_json(silent=True) or {}
    name = (payload.get('name') or '').strip() if isinstance(payload.get('name'), str) else ''
    if not name:
        return jsonify({'error': 'Playlist name required'}), 400

    uris = _normalize_uris(payload.get('trackUris'))
    if not uris:
        return jsonify({'error': 'trackUris must be a non-empty list'}), 400

    settings = current_app.extensions['settings']
    service = PlaylistService(
        current_app.extensions['spotify_gateway_factory'](access_token),
        description=settings.playlist_description,
        public=settings.playlist_public,
    )
    try:
        playlist = service.create(name, uris)
    except UpstreamError as exc:
        record_upstream_failure(exc.service)
        logger.error('Error creating playlist: %s', exc, exc_info=True)
        return jsonify({'error': 'Failed to create playlist'}), 500

    record_playlist_created()
    return jsonify({'success': True, 'playlist': playlist.model_dump()}), 200


__all__ = ['playlist_bp']
