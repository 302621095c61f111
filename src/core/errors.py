"""Exception hierarchy raised by the domain and infrastructure layers.

Route handlers catch these at the HTTP boundary and turn them into a
single ``{"error": ...}`` payload; upstream details stay in the server log.
"""

from __future__ import annotations

from typing import Optional


class PlaylistGeneratorError(Exception):
    """Base class for every error this application raises on purpose."""


class MissingCredentialError(PlaylistGeneratorError):
    """No bearer token was supplied with the request."""

    def __init__(self, message: str = "Access token required") -> None:
        super().__init__(message)


class UpstreamError(PlaylistGeneratorError):
    """A call to the music service or the language model failed."""

    def __init__(self, service: str, action: str, *, status: Optional[int] = None, detail: str = "") -> None:
        self.service = service
        self.action = action
        self.status = status
        self.detail = detail
        message = f"{service} call failed during {action}"
        if status is not None:
            message = f"{message} (HTTP {status})"
        super().__init__(message)


class ModelResponseParseError(PlaylistGeneratorError):
    """No JSON object could be extracted from a language-model response."""


__all__ = [
    "PlaylistGeneratorError",
    "MissingCredentialError",
    "UpstreamError",
    "ModelResponseParseError",
]
