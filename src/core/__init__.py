"""Core primitives shared across backend layers."""

from .errors import (
    MissingCredentialError,
    ModelResponseParseError,
    PlaylistGeneratorError,
    UpstreamError,
)

__all__ = [
    "PlaylistGeneratorError",
    "MissingCredentialError",
    "UpstreamError",
    "ModelResponseParseError",
]
