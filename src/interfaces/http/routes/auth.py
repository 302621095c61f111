#!/usr/bin/env python
"""Spotify authorization-code flow and token helpers."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import requests
from flask import Blueprint, current_app, jsonify, redirect, request, session
from spotipy.oauth2 import SpotifyOauthError

from src.auth import generate_state, token_required
from src.core.errors import UpstreamError
from src.infrastructure.spotify import build_oauth
from src.observability.metrics import record_upstream_failure


logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

_STATE_KEY = "oauth_state"


def _settings():
    return current_app.extensions["settings"]


def _fragment_redirect(**params):
    return redirect("/#" + urlencode(params))


def _oauth_unavailable():
    return jsonify({"error": "Spotify OAuth is not configured"}), 503


@auth_bp.route("/login", methods=["GET"])
def login():
    settings = _settings()
    if not settings.oauth_configured:
        return _oauth_unavailable()

    state = generate_state()
    session[_STATE_KEY] = state
    return redirect(build_oauth(settings).get_authorize_url(state=state))


@auth_bp.route("/callback", methods=["GET"])
def callback():
    settings = _settings()
    if not settings.oauth_configured:
        return _oauth_unavailable()

    expected_state = session.pop(_STATE_KEY, None)
    state = request.args.get("state")
    if not state or state != expected_state:
        logger.warning("OAuth callback rejected: state mismatch")
        return _fragment_redirect(error="state_mismatch")

    if request.args.get("error"):
        return _fragment_redirect(error=request.args["error"])

    code = request.args.get("code")
    if not code:
        return _fragment_redirect(error="invalid_token")

    try:
        token_info = build_oauth(settings).get_access_token(code, as_dict=True, check_cache=False)
    except (SpotifyOauthError, requests.exceptions.RequestException) as exc:
        record_upstream_failure("spotify")
        logger.error("Error getting token: %s", exc, exc_info=True)
        return _fragment_redirect(error="invalid_token")

    return _fragment_redirect(
        access_token=token_info["access_token"],
        refresh_token=token_info.get("refresh_token") or "",
    )


@auth_bp.route("/api/refresh-token", methods=["POST"])
def refresh_token():
    settings = _settings()
    if not settings.oauth_configured:
        return _oauth_unavailable()

    payload = request.get_json(silent=True) or {}
    token = payload.get("refreshToken")
    if not isinstance(token, str) or not token.strip():
        return jsonify({"error": "Refresh token required"}), 400

    try:
        token_info = build_oauth(settings).refresh_access_token(token.strip())
    except (SpotifyOauthError, requests.exceptions.RequestException) as exc:
        record_upstream_failure("spotify")
        logger.error("Error refreshing token: %s", exc, exc_info=True)
        return jsonify({"error": "Failed to refresh token"}), 500

    return jsonify({
        "accessToken": token_info["access_token"],
        "expiresIn": token_info.get("expires_in"),
    }), 200


@auth_bp.route("/api/me", methods=["GET"])
@token_required
def me(access_token: str):
    gateway = current_app.extensions["spotify_gateway_factory"](access_token)
    try:
        user = gateway.current_user()
    except UpstreamError as exc:
        record_upstream_failure(exc.service)
        logger.error("Error getting user info: %s", exc, exc_info=True)
        return jsonify({"error": "Failed to get user info"}), 500
    return jsonify({"id": user.get("id"), "displayName": user.get("display_name")}), 200


__all__ = ["auth_bp"]
