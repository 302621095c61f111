#!/usr/bin/env python
"""
Pydantic DTOs for the request-scoped entities exchanged with the frontend.

Every instance is built per request from upstream API responses and is
never persisted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrackDTO(BaseModel):
    """A recommended track joined with its measured tempo."""

    id: str
    name: str
    artists: str
    album: str
    uri: str
    image: Optional[str] = None
    bpm: Optional[int] = None


class QueryDescriptor(BaseModel):
    """Canonical search criteria consumed by the track aggregator."""

    model_config = ConfigDict(populate_by_name=True)

    bpm_min: int = Field(alias="bpmMin")
    bpm_max: int = Field(alias="bpmMax")
    genres: List[str] = Field(default_factory=list)
    target_energy: float = Field(default=0.5, ge=0.0, le=1.0, alias="targetEnergy")
    # Display only; never used for filtering.
    mood: Optional[str] = None

    @property
    def midpoint(self) -> float:
        return (self.bpm_min + self.bpm_max) / 2

    def contains(self, bpm: Optional[int]) -> bool:
        return bpm is not None and self.bpm_min <= bpm <= self.bpm_max


class PlaylistDTO(BaseModel):
    """Playlist created on the user's account."""

    id: str
    name: str
    url: Optional[str] = None


class ParsedPrompt(BaseModel):
    """Loosely-typed criteria extracted from a language-model response."""

    criteria: Dict[str, Any] = Field(default_factory=dict)
    suggested_name: Optional[str] = None


__all__ = ["TrackDTO", "QueryDescriptor", "PlaylistDTO", "ParsedPrompt"]
