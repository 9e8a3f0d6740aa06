# contour.py
# Directional contour features: ray lengths from a reference point out to the
# peripheral foreground pixel in each direction, normalised to a unit
# ("contributivity") vector.
# Dependencies: numpy

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[int, int]   # (row, col)

# (dy, dx); index i and i + 4 point in opposite directions
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 1), (1, 0), (1, -1),
    (0, -1), (-1, -1), (-1, 0), (-1, 1),
)


class FeatureKind(Enum):
    FULL = "full"
    HALF = "half"
    EMPTY = "empty"


@dataclass(frozen=True)
class DirectionalFeature:
    kind: FeatureKind
    values: Tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    @property
    def empty(self) -> bool:
        return self.kind is FeatureKind.EMPTY

    def value(self, index: int) -> float:
        return self.values[index]

    def as_array(self, dims: int) -> np.ndarray:
        """The values as a vector of `dims`; EMPTY reads as zeros."""
        if self.kind is FeatureKind.EMPTY:
            return np.zeros(dims)
        if len(self.values) != dims:
            raise ValueError(f"{self.kind.value} feature has {len(self.values)} values, expected {dims}")
        return np.asarray(self.values, dtype=np.float64)

EMPTY = DirectionalFeature(FeatureKind.EMPTY)


def _normalise(raw: np.ndarray) -> Tuple[float, ...]:
    return tuple(float(v) for v in raw / np.linalg.norm(raw))

def full_feature(lengths: Optional[Sequence[int]]) -> DirectionalFeature:
    if lengths is None:
        return EMPTY
    return DirectionalFeature(FeatureKind.FULL, _normalise(np.asarray(lengths, dtype=np.float64)))

def half_feature(lengths: Optional[Sequence[int]]) -> DirectionalFeature:
    """Opposite directions summed before normalising."""
    if lengths is None:
        return EMPTY
    raw = np.asarray(lengths, dtype=np.float64)
    if raw.size % 2:
        raise ValueError(f"half features need an even number of directions, got {raw.size}")
    n = raw.size // 2
    return DirectionalFeature(FeatureKind.HALF, _normalise(raw[:n] + raw[n:]))

# --- ray casting -------------------------------------------------------------

def reference_point(mask: np.ndarray) -> Optional[Point]:
    """Rounded foreground centroid, None for a blank mask."""
    pts = np.argwhere(mask)
    if pts.size == 0:
        return None
    cy, cx = pts.mean(axis=0)
    return (int(round(cy)), int(round(cx)))

def column_points(mask: np.ndarray) -> List[Point]:
    """One sample point per column, on the centroid row."""
    ref = reference_point(mask)
    row = ref[0] if ref is not None else mask.shape[0] // 2
    return [(row, col) for col in range(mask.shape[1])]

def cast_ray(mask: np.ndarray, point: Point, delta: Tuple[int, int]) -> Optional[int]:
    """
    Walk from `point` along `delta` to the region edge. Returns the step count
    to the outermost foreground pixel plus one (the start pixel counts), or
    None if the ray meets no foreground.
    """
    H, W = mask.shape
    y, x = point
    dy, dx = delta
    last = None; step = 0
    while 0 <= y < H and 0 <= x < W:
        if mask[y, x]:
            last = step
        y += dy; x += dx; step += 1
    return None if last is None else last + 1

def ray_lengths(mask: np.ndarray, point: Point,
                directions: Sequence[Tuple[int, int]] = DIRECTIONS) -> Optional[List[int]]:
    """Per-direction lengths (0 where a ray finds nothing); None if no ray finds anything."""
    hits = [cast_ray(mask, point, d) for d in directions]
    if all(h is None for h in hits):
        return None
    return [0 if h is None else h for h in hits]

# --- per-glyph record --------------------------------------------------------

@dataclass(eq=False)
class ContourInfo:
    """
    Raw lengths for every sampled point of one glyph. Full/half features are
    computed on first access and cached.
    """
    lengths: List[Optional[List[int]]]
    num_directions: int = len(DIRECTIONS)

    @property
    def num_points(self) -> int:
        return len(self.lengths)

    @cached_property
    def full_features(self) -> List[DirectionalFeature]:
        return [full_feature(l) for l in self.lengths]

    @cached_property
    def half_features(self) -> List[DirectionalFeature]:
        return [half_feature(l) for l in self.lengths]

    def full_dimensions(self) -> np.ndarray:
        return _flatten(self.full_features, self.num_directions)

    def half_dimensions(self) -> np.ndarray:
        return _flatten(self.half_features, self.num_directions // 2)

    def full_grouped_dimensions(self, group_size: int) -> np.ndarray:
        return self._grouped(self.full_dimensions(), group_size, self.num_directions)

    def half_grouped_dimensions(self, group_size: int) -> np.ndarray:
        return self._grouped(self.half_dimensions(), group_size, self.num_directions // 2)

    def _grouped(self, base: np.ndarray, group_size: int, dims: int) -> np.ndarray:
        """Mean over each run of `group_size` consecutive points, per dimension."""
        if group_size <= 0 or self.num_points % group_size:
            raise ValueError(f"{self.num_points} sample points cannot be split into groups of {group_size}")
        blocks = base.reshape(self.num_points // group_size, group_size, dims)
        return blocks.mean(axis=1).ravel()

def _flatten(features: List[DirectionalFeature], dims: int) -> np.ndarray:
    if not features:
        return np.zeros(0)
    return np.concatenate([f.as_array(dims) for f in features])

# --- public API --------------------------------------------------------------

def contour_info(mask: np.ndarray, points: Optional[Sequence[Point]] = None,
                 directions: Sequence[Tuple[int, int]] = DIRECTIONS) -> ContourInfo:
    """
    Ray lengths for `mask` at each sample point (default: its centroid only).
    A blank mask yields a single Empty sample.
    """
    mask = np.asarray(mask, dtype=bool)
    if points is None:
        ref = reference_point(mask)
        points = [ref] if ref is not None else []
    lengths = [ray_lengths(mask, p, directions) for p in points] or [None]
    return ContourInfo(lengths=lengths, num_directions=len(directions))

def directional_feature(mask: np.ndarray, mode: str = "full") -> DirectionalFeature:
    info = contour_info(mask)
    if mode == "full":
        return info.full_features[0]
    if mode == "half":
        return info.half_features[0]
    raise ValueError(f"mode must be 'full' or 'half', got {mode!r}")

def feature_distance(a: np.ndarray, b: np.ndarray) -> float:
    a = np.asarray(a, dtype=np.float64); b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"cannot compare feature vectors of shape {a.shape} and {b.shape}")
    return float(np.linalg.norm(a - b))
