"""Track search domain (recommendations filtered by tempo)."""

from .aggregator import OVERFETCH_FACTOR, TrackAggregator

__all__ = ["OVERFETCH_FACTOR", "TrackAggregator"]
