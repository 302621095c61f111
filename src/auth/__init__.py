#!/usr/bin/env python
"""Bearer-token handling for the JSON API and OAuth state helpers."""

from __future__ import annotations

import logging
import secrets
from functools import wraps
from typing import Any, Mapping, Optional

from flask import jsonify, request

from src.core.errors import MissingCredentialError

logger = logging.getLogger(__name__)

STATE_LENGTH = 16


def generate_state(length: int = STATE_LENGTH) -> str:
    """Random URL-safe value (letters, digits, ``-`` and ``_``) for the OAuth ``state`` parameter."""
    return secrets.token_urlsafe(length)[:length]


def extract_access_token(payload: Optional[Mapping[str, Any]] = None) -> str:
    """Read the user's token from the JSON body or the Authorization header."""
    if payload:
        token = payload.get("accessToken")
        if isinstance(token, str) and token.strip():
            return token.strip()
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    raise MissingCredentialError()


def token_required(view):
    """Reject the request with 401 before any outbound call when no token is present.

    The token is passed to the view as the ``access_token`` keyword argument.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        payload = request.get_json(silent=True) or {}
        try:
            kwargs["access_token"] = extract_access_token(payload)
        except MissingCredentialError as exc:
            logger.info("Rejected %s without access token", request.path)
            return jsonify({"error": str(exc)}), 401
        return view(*args, **kwargs)

    return wrapper


__all__ = ["STATE_LENGTH", "extract_access_token", "generate_state", "token_required"]
