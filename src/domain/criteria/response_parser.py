"""Extract search criteria from free-form language-model output.

Models are asked for a bare JSON object but routinely wrap it in prose or
code fences, so the first decodable ``{...}`` object in the text wins.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from src.core.errors import ModelResponseParseError
from src.models.dto import ParsedPrompt

_NAME_KEYS = ("playlistName", "suggestedName", "playlist_name")

_decoder = json.JSONDecoder()


def _first_json_object(text: str) -> Optional[Dict[str, Any]]:
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def parse_model_response(text: Any) -> ParsedPrompt:
    """Return the criteria found in ``text`` or raise ModelResponseParseError."""
    if not isinstance(text, str) or not text.strip():
        raise ModelResponseParseError("Empty response from language model")

    payload = _first_json_object(text)
    if payload is None:
        raise ModelResponseParseError("No JSON object found in language model response")

    suggested_name = None
    for key in _NAME_KEYS:
        value = payload.pop(key, None)
        if suggested_name is None and isinstance(value, str) and value.strip():
            suggested_name = value.strip()

    return ParsedPrompt(criteria=payload, suggested_name=suggested_name)


__all__ = ["parse_model_response"]
