"""Track search endpoints (explicit BPM range, criteria, free-text prompt)."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Blueprint, current_app, jsonify, request

from src.auth import token_required
from src.core.errors import ModelResponseParseError, UpstreamError
from src.domain.criteria import as_finite_number, normalize_criteria
from src.domain.tracks import TrackAggregator
from src.models.dto import ParsedPrompt, QueryDescriptor
from src.observability.metrics import record_prompt_parse_failure, record_search, record_upstream_failure
from src.settings import MAX_RESULT_LIMIT

logger = logging.getLogger(__name__)

search_bp = Blueprint('search_bp', __name__, url_prefix='/api')

_DESCRIPTOR_EXTRAS = ('genres', 'energy', 'mood')


class _PromptFailure(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


def _settings():
    return current_app.extensions['settings']


def _aggregator(access_token: str) -> TrackAggregator:
    gateway = current_app.extensions['spotify_gateway_factory'](access_token)
    return TrackAggregator(gateway)


def _limit(payload: Mapping[str, Any], default: int) -> int:
    raw = payload.get('limit', default)
    try:
        limit = int(raw)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(1, min(limit, MAX_RESULT_LIMIT))


def _search(access_token: str, descriptor: QueryDescriptor, limit: int, mode: str):
    """Run the aggregator; returns either the track list or an error response."""
    try:
        tracks = _aggregator(access_token).search(descriptor, limit)
    except UpstreamError as exc:
        record_upstream_failure(exc.service)
        logger.error('Error searching tracks: %s', exc, exc_info=True)
        return None, (jsonify({'error': 'Failed to search tracks'}), 500)
    record_search(mode, len(tracks))
    return [track.model_dump() for track in tracks], None


def _interpret(prompt: str) -> ParsedPrompt:
    interpreter = current_app.extensions.get('prompt_interpreter')
    if interpreter is None:
        raise _PromptFailure('Prompt parsing is not configured', 503)
    try:
        return interpreter.interpret(prompt)
    except ModelResponseParseError as exc:
        record_prompt_parse_failure()
        logger.warning('Could not parse AI response: %s', exc)
        raise _PromptFailure('Failed to parse AI response', 422) from exc
    except UpstreamError as exc:
        record_upstream_failure(exc.service)
        logger.error('Error parsing prompt: %s', exc, exc_info=True)
        raise _PromptFailure('Failed to parse prompt', 500) from exc


def _prompt_text(payload: Mapping[str, Any]) -> Optional[str]:
    prompt = payload.get('prompt')
    if isinstance(prompt, str) and prompt.strip():
        return prompt.strip()
    return None


@search_bp.route('/search-by-bpm', methods=['POST'])
@token_required
def search_by_bpm(access_token: str):
    payload = request.get_json(silent=True) or {}
    min_bpm, max_bpm = payload.get('minBpm'), payload.get('maxBpm')
    if as_finite_number(min_bpm) is None or as_finite_number(max_bpm) is None:
        return jsonify({'error': 'minBpm and maxBpm must be numbers'}), 400

    raw = {'minBpm': min_bpm, 'maxBpm': max_bpm}
    raw.update({key: payload[key] for key in _DESCRIPTOR_EXTRAS if key in payload})
    descriptor = normalize_criteria(raw)
    if descriptor.bpm_min >= descriptor.bpm_max:
        return jsonify({'error': 'maxBpm must be greater than minBpm'}), 400

    limit = _limit(payload, _settings().bpm_search_default_limit)
    tracks, error = _search(access_token, descriptor, limit, mode='bpm')
    if error is not None:
        return error
    return jsonify({'tracks': tracks}), 200


@search_bp.route('/search-by-criteria', methods=['POST'])
@token_required
def search_by_criteria(access_token: str):
    payload = request.get_json(silent=True) or {}
    criteria = payload.get('criteria')
    suggested_name = None
    mode = 'criteria'

    if not isinstance(criteria, dict):
        prompt = _prompt_text(payload)
        if prompt is None:
            # An empty descriptor still yields the default search window.
            criteria = {}
        else:
            try:
                parsed = _interpret(prompt)
            except _PromptFailure as exc:
                return jsonify({'error': str(exc)}), exc.status
            criteria = parsed.criteria
            suggested_name = parsed.suggested_name
            mode = 'prompt'

    descriptor = normalize_criteria(criteria)
    limit = _limit(payload, _settings().prompt_search_default_limit)
    tracks, error = _search(access_token, descriptor, limit, mode=mode)
    if error is not None:
        return error

    body = {'tracks': tracks, 'criteria': descriptor.model_dump(by_alias=True)}
    if suggested_name:
        body['suggestedName'] = suggested_name
    return jsonify(body), 200


@search_bp.route('/parse-prompt', methods=['POST'])
@token_required
def parse_prompt(access_token: str):
    payload = request.get_json(silent=True) or {}
    prompt = _prompt_text(payload)
    if prompt is None:
        return jsonify({'error': 'Prompt required'}), 400

    try:
        parsed = _interpret(prompt)
    except _PromptFailure as exc:
        return jsonify({'error': str(exc)}), exc.status

    descriptor = normalize_criteria(parsed.criteria)
    return jsonify({
        'criteria': parsed.criteria,
        'descriptor': descriptor.model_dump(by_alias=True),
        'suggestedName': parsed.suggested_name,
    }), 200


__all__ = ['search_bp']
