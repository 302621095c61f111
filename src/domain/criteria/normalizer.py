"""Turn loosely-typed search criteria into a canonical QueryDescriptor.

Input may come from the explicit BPM form (``minBpm``/``maxBpm``) or from a
language-model response (``bpm`` as a point or ``{min, max}``, ``genres``,
``energy`` label, ``mood``). Every shape degrades to a default; nothing here
raises.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional, Tuple

from src.models.dto import QueryDescriptor

BPM_FLOOR = 60
BPM_CEILING = 200
BPM_SPREAD = 10
DEFAULT_BPM_RANGE: Tuple[int, int] = (100, 140)

ENERGY_TARGETS = {
    "low": 0.3,
    "medium": 0.5,
    "high": 0.8,
}
DEFAULT_ENERGY = 0.5

_EXPLICIT_PAIRS = (("minBpm", "maxBpm"), ("bpmMin", "bpmMax"))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_finite_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None for anything else."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _clamp(value: float, low: int = BPM_FLOOR, high: int = BPM_CEILING) -> float:
    return max(low, min(high, value))


def expand_bpm(value: float) -> Tuple[int, int]:
    """Expand a point tempo into a +/- BPM_SPREAD window clamped to [60, 200]."""
    return (
        _round_half_up(_clamp(value - BPM_SPREAD)),
        _round_half_up(_clamp(value + BPM_SPREAD)),
    )


def _explicit_pair(low: Any, high: Any) -> Optional[Tuple[int, int]]:
    low_n, high_n = as_finite_number(low), as_finite_number(high)
    if low_n is None or high_n is None:
        return None
    return _round_half_up(low_n), _round_half_up(high_n)


def _bpm_range(raw: Mapping[str, Any]) -> Tuple[int, int]:
    bpm = raw.get("bpm")
    if isinstance(bpm, Mapping):
        pair = _explicit_pair(bpm.get("min"), bpm.get("max"))
        if pair is not None:
            return pair
    else:
        point = as_finite_number(bpm)
        if point is not None:
            return expand_bpm(point)

    for low_key, high_key in _EXPLICIT_PAIRS:
        if low_key in raw or high_key in raw:
            pair = _explicit_pair(raw.get(low_key), raw.get(high_key))
            if pair is not None:
                return pair
    return DEFAULT_BPM_RANGE


def energy_target(label: Any) -> float:
    """Map an energy label to a numeric target; unknown labels mean medium."""
    if not isinstance(label, str):
        return DEFAULT_ENERGY
    return ENERGY_TARGETS.get(label.strip().lower(), DEFAULT_ENERGY)


def _genres(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [genre for genre in value if isinstance(genre, str)]


def normalize_criteria(raw: Any) -> QueryDescriptor:
    """Build the canonical descriptor from whatever criteria shape was supplied."""
    if not isinstance(raw, Mapping):
        raw = {}
    bpm_min, bpm_max = _bpm_range(raw)
    mood = raw.get("mood")
    return QueryDescriptor(
        bpm_min=bpm_min,
        bpm_max=bpm_max,
        genres=_genres(raw.get("genres")),
        target_energy=energy_target(raw.get("energy")),
        mood=mood if isinstance(mood, str) else None,
    )


__all__ = [
    "BPM_FLOOR",
    "BPM_CEILING",
    "BPM_SPREAD",
    "DEFAULT_BPM_RANGE",
    "as_finite_number",
    "energy_target",
    "expand_bpm",
    "normalize_criteria",
]
