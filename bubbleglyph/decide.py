# decide.py
# Tunable constants and the heuristic decision rules built on them.
# Raw measurements live in the stage modules so thresholds can be tuned here
# without duplicating implementations.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from .geometry import Rect

# ---------------------------
# Tunable thresholds (one place)
# ---------------------------

@dataclass
class Thresholds:
    # Grid discretisation
    POINT_SIZE: int = 2
    POINT_DENSITY: float = 0.75

    # Stroke linking
    OVERLAP_PERCENT: float = 0.50
    MIN_LINE_SLICES: int = 3

    # Region discovery
    ADJACENCY_REACH: float | None = 1.0   # x caster extent; None = to image edge
    SPLIT_TOUCHING: bool = False

    # Furigana
    FURIGANA_WIDTH_RATIO: float = 0.5

    # Reading order
    VERTICAL_ASPECT: float = 3.0
    BREAK_GAP_RATIO: float = 0.75

    # Contour features
    GROUP_SIZE: int = 1

T = Thresholds()


class Direction(Enum):
    LTR = "ltr"
    DOWN = "down"

# ---------------------------
# Shared primitive
# ---------------------------

def upper_median(values: Sequence[float]) -> float:
    """Middle element of the sorted values (the higher one for even counts)."""
    if not values:
        raise ValueError("median of an empty sequence")
    ordered = sorted(values)
    return float(ordered[len(ordered) // 2])

# ---------------------------
# Orientation
# ---------------------------

def guess_direction(bounds: Rect, t: Thresholds = T) -> Direction:
    """Coarse aspect heuristic: tall clusters read downwards."""
    if bounds.height > t.VERTICAL_ASPECT * bounds.width:
        return Direction.DOWN
    return Direction.LTR

# ---------------------------
# Furigana decisions
# ---------------------------

def furigana_candidates(rects: Sequence[Rect], t: Thresholds = T) -> List[Rect]:
    """Boxes narrower than FURIGANA_WIDTH_RATIO of the median width."""
    if not rects:
        return []
    limit = upper_median([r.width for r in rects]) * t.FURIGANA_WIDTH_RATIO
    return [r for r in rects if r.width < limit]

def attaches_beside(candidate: Rect, host: Rect) -> bool:
    """Candidate starts less than half a host width past the host's right edge."""
    return candidate.x - host.right < host.width / 2

def attaches_above(candidate: Rect, host: Rect) -> bool:
    """Candidate sits over the host, less than half a host height above it."""
    return candidate.bottom <= host.y and host.y - candidate.bottom < host.height / 2

# ---------------------------
# Reading-order breaks
# ---------------------------

def is_break(gap: int, extent: float, t: Thresholds = T) -> bool:
    return gap > t.BREAK_GAP_RATIO * extent
