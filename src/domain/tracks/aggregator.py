"""Recommendation lookup joined with measured tempo and filtered by BPM."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from src.infrastructure.spotify import MAX_RECOMMENDATIONS, MAX_SEEDS
from src.models.dto import QueryDescriptor, TrackDTO

logger = logging.getLogger(__name__)

# Candidates requested per wanted track; the tempo filter discards the rest.
OVERFETCH_FACTOR = 3


def _round_tempo(tempo: Any) -> Optional[int]:
    if isinstance(tempo, bool) or not isinstance(tempo, (int, float)):
        return None
    if math.isnan(tempo) or math.isinf(tempo):
        return None
    return int(math.floor(tempo + 0.5))


def _to_track(candidate: Dict[str, Any], bpm: Optional[int]) -> TrackDTO:
    album = candidate.get('album') or {}
    images = album.get('images') or []
    return TrackDTO(
        id=candidate['id'],
        name=candidate.get('name') or '',
        artists=', '.join(a.get('name', '') for a in candidate.get('artists') or [] if a),
        album=album.get('name') or '',
        uri=candidate.get('uri') or f"spotify:track:{candidate['id']}",
        image=images[0].get('url') if images and images[0] else None,
        bpm=bpm,
    )


class TrackAggregator:
    """Find tracks for a QueryDescriptor using the user's Spotify account.

    ``gateway`` is a SpotifyGateway (or anything with the same methods).
    Upstream failures propagate untouched; nothing is retried or cached.
    """

    def __init__(self, gateway) -> None:
        self.gateway = gateway

    def seed_track_ids(self, count: int = MAX_SEEDS) -> List[str]:
        return self.gateway.top_track_ids(limit=min(count, MAX_SEEDS))

    @staticmethod
    def build_seeds(descriptor: QueryDescriptor, seed_track_ids: Sequence[str]) -> Dict[str, List[str]]:
        genre_seeds = descriptor.genres[:1]
        track_budget = MAX_SEEDS - len(genre_seeds)
        return {
            'seed_tracks': list(seed_track_ids)[:track_budget],
            'seed_genres': list(genre_seeds),
        }

    def _tempos(self, candidates: List[Dict[str, Any]]) -> List[Optional[int]]:
        ids = [candidate['id'] for candidate in candidates]
        features = self.gateway.audio_features(ids)

        # Upstream is assumed to answer in request order; rows that carry a
        # different id are treated as missing rather than trusted.
        tempos: List[Optional[int]] = []
        for index, track_id in enumerate(ids):
            row = features[index] if index < len(features) else None
            if not row:
                tempos.append(None)
                continue
            row_id = row.get('id')
            if row_id and row_id != track_id:
                logger.warning(
                    "Audio features out of order at position %d: expected %s, got %s",
                    index, track_id, row_id,
                )
                tempos.append(None)
                continue
            tempos.append(_round_tempo(row.get('tempo')))
        return tempos

    def aggregate(self, descriptor: QueryDescriptor, seed_track_ids: Sequence[str], limit: int) -> List[TrackDTO]:
        if limit <= 0:
            return []

        seeds = self.build_seeds(descriptor, seed_track_ids)
        candidates = self.gateway.recommendations(
            **seeds,
            limit=min(OVERFETCH_FACTOR * limit, MAX_RECOMMENDATIONS),
            target_tempo=descriptor.midpoint,
            min_tempo=descriptor.bpm_min,
            max_tempo=descriptor.bpm_max,
            target_energy=descriptor.target_energy,
        )
        candidates = [c for c in candidates if c.get('id')]
        if not candidates:
            logger.info("No recommendations for %s-%s BPM", descriptor.bpm_min, descriptor.bpm_max)
            return []

        tempos = self._tempos(candidates)
        tracks = [
            _to_track(candidate, bpm)
            for candidate, bpm in zip(candidates, tempos)
            if descriptor.contains(bpm)
        ]
        logger.info(
            "Kept %d of %d candidates within %s-%s BPM",
            len(tracks), len(candidates), descriptor.bpm_min, descriptor.bpm_max,
        )
        return tracks[:limit]

    def search(self, descriptor: QueryDescriptor, limit: int) -> List[TrackDTO]:
        """Seed from the user's top tracks, then aggregate."""
        return self.aggregate(descriptor, self.seed_track_ids(), limit)


__all__ = ["OVERFETCH_FACTOR", "TrackAggregator"]
