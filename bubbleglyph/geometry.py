# geometry.py
# slice pieces, slices, rectangles and the overlap math shared by every stage

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

Bounds = Tuple[int, int]   # inclusive [start, end]


def runs(line: np.ndarray) -> List[Bounds]:
    """Maximal runs of True in a 1-D mask as inclusive (start, end) pairs."""
    padded = np.concatenate(([0], np.asarray(line, dtype=np.int8), [0]))
    edges = np.flatnonzero(np.diff(padded))
    return [(int(s), int(e) - 1) for s, e in zip(edges[0::2], edges[1::2])]


# --- scan-line pieces --------------------------------------------------------

@dataclass
class SlicePiece:
    start: int
    end: int

    def bounds(self) -> Bounds:
        return (self.start, self.end)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def thin(self) -> None:
        """Collapse to the midpoint."""
        point = self.start + (self.end - self.start) // 2
        self.start = self.end = point

    def extend(self, index: int) -> None:
        if index < self.start:
            self.start = index
        elif index > self.end:
            self.end = index


@dataclass
class Slice:
    horizontal: bool   # True = a row scan, False = a column scan
    pieces: List[SlicePiece] = field(default_factory=list)


def absolute_overlap_percent(a, b) -> float:
    """
    Shared integer positions of two [start, end] ranges divided by the
    length of the larger one. Accepts SlicePieces or (start, end) tuples.
    """
    a0, a1 = a.bounds() if isinstance(a, SlicePiece) else a
    b0, b1 = b.bounds() if isinstance(b, SlicePiece) else b
    shared = max(0, min(a1, b1) - max(a0, b0) + 1)
    return shared / max(a1 - a0 + 1, b1 - b0 + 1)


# --- rectangles --------------------------------------------------------------

@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)

    def intersects(self, other: "Rect") -> bool:
        """Positive-area overlap; touching edges do not count."""
        if self.area <= 0 or other.area <= 0:
            return False
        return (self.x < other.right and other.x < self.right
                and self.y < other.bottom and other.y < self.bottom)

    def union(self, other: "Rect") -> "Rect":
        x0, y0 = min(self.x, other.x), min(self.y, other.y)
        x1, y1 = max(self.right, other.right), max(self.bottom, other.bottom)
        return Rect(x0, y0, x1 - x0, y1 - y0)

    def vertical_overlap(self, other: "Rect") -> int:
        return max(0, min(self.bottom, other.bottom) - max(self.y, other.y))

    def horizontal_overlap(self, other: "Rect") -> int:
        return max(0, min(self.right, other.right) - max(self.x, other.x))

    def crop(self, grid: np.ndarray) -> np.ndarray:
        return grid[self.y:self.bottom, self.x:self.right]


def bounding_union(rects: Iterable[Rect]) -> Rect | None:
    out = None
    for r in rects:
        out = r if out is None else out.union(r)
    return out
