"""Adapters for third-party services."""

from .spotify import SpotifyGateway, build_oauth

__all__ = ["SpotifyGateway", "build_oauth"]
