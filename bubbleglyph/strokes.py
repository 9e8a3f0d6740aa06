# strokes.py
# Stroke/line extraction: scan-line runs -> linked Lines -> 1-px paths.
# Dependencies: numpy

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np

from .decide import T
from .geometry import Slice, SlicePiece, absolute_overlap_percent, runs

logger = logging.getLogger(__name__)


@dataclass
class Line:
    """
    A connected stroke: one SlicePiece from each of several consecutive scan lines.
    `start`/`end` are the scan-line indices spanned; `horizontal` is the stroke
    direction (built from column scans).
    """
    start: int
    horizontal: bool
    pieces: List[SlicePiece] = field(default_factory=list)
    end: int = -1

    def __post_init__(self):
        if self.end < self.start:
            self.end = self.start + max(len(self.pieces) - 1, 0)

    @classmethod
    def begin(cls, index: int, horizontal: bool, piece: SlicePiece) -> "Line":
        return cls(start=index, horizontal=horizontal, pieces=[piece], end=index)

    def add(self, piece: SlicePiece, index: int) -> None:
        if index != self.end + 1:
            raise RuntimeError(f"line ending at {self.end} cannot take a piece at {index}")
        self.pieces.append(piece)
        self.end = index

    @property
    def last_piece(self) -> SlicePiece:
        return self.pieces[-1]

    def single_path(self) -> None:
        """
        Thin the line to a single 1-px path: even pieces collapse to their
        midpoint, odd pieces bridge between their thinned neighbours.
        """
        for i in range(0, len(self.pieces), 2):
            self.pieces[i].thin()
        for i in range(1, len(self.pieces), 2):
            piece = self.pieces[i]
            left = self.pieces[i - 1].start
            if i == len(self.pieces) - 1:
                piece.thin()
                piece.extend(left)
            else:
                right = self.pieces[i + 1].start
                piece.start, piece.end = min(left, right), max(left, right)

    def pixels(self) -> Iterator[Tuple[int, int]]:
        """(row, col) of every pixel covered by the line."""
        for offset, piece in enumerate(self.pieces):
            scan = self.start + offset
            for j in range(piece.start, piece.end + 1):
                yield (j, scan) if self.horizontal else (scan, j)

# --- slicing -----------------------------------------------------------------

def character_slices(grid: np.ndarray, horizontal: bool) -> List[Slice]:
    """One Slice per row (horizontal=True) or per column of the grid."""
    g = np.asarray(grid, dtype=bool)
    lines = g if horizontal else g.T
    return [Slice(horizontal, [SlicePiece(s, e) for s, e in runs(line)]) for line in lines]

# --- linking -----------------------------------------------------------------

def slices_to_lines(slices: List[Slice], horizontal_slices: bool,
                    overlap_percent: float = T.OVERLAP_PERCENT) -> List[Line]:
    """
    Link pieces of consecutive slices into Lines.
    A piece joins the first open line whose last piece it overlaps by at least
    `overlap_percent`; otherwise it opens a new line. Lines not extended by a
    slice are closed.
    """
    closed: List[Line] = []
    open_lines: List[Line] = []

    for index, sl in enumerate(slices):
        extended = [False] * len(open_lines)
        fresh: List[Line] = []
        for piece in sl.pieces:
            for k, line in enumerate(open_lines):
                if extended[k]:
                    continue
                if absolute_overlap_percent(piece, line.last_piece) >= overlap_percent:
                    line.add(piece, index)
                    extended[k] = True
                    break
            else:
                fresh.append(Line.begin(index, not horizontal_slices, piece))

        closed.extend(line for k, line in enumerate(open_lines) if not extended[k])
        open_lines = [line for k, line in enumerate(open_lines) if extended[k]] + fresh

    closed.extend(open_lines)
    return closed

def prune_lines(lines: List[Line], min_slices: int = T.MIN_LINE_SLICES) -> List[Line]:
    """Drop lines made of fewer than `min_slices` pieces."""
    return [line for line in lines if len(line.pieces) >= min_slices]

def single_path_lines(lines: List[Line]) -> List[Line]:
    for line in lines:
        line.single_path()
    return lines

# --- public API --------------------------------------------------------------

def get_lines(grid: np.ndarray, horizontal_lines: bool, *,
              overlap_percent: float = T.OVERLAP_PERCENT,
              min_slices: int = T.MIN_LINE_SLICES) -> List[Line]:
    """
    Strokes running in the requested direction.
    Horizontal strokes come from column slices and vice versa.
    """
    slices = character_slices(grid, horizontal=not horizontal_lines)
    lines = prune_lines(slices_to_lines(slices, not horizontal_lines, overlap_percent), min_slices)
    logger.debug("%d %s lines from %d slices", len(lines),
                 "horizontal" if horizontal_lines else "vertical", len(slices))
    return lines

def stroke_paths(grid: np.ndarray, horizontal_lines: bool, **kwargs) -> List[Line]:
    """get_lines() with every line thinned to a single path."""
    return single_path_lines(get_lines(grid, horizontal_lines, **kwargs))

def draw_lines(lines: List[Line], shape: Tuple[int, int]) -> np.ndarray:
    """Render lines onto a fresh bool grid of `shape`."""
    out = np.zeros(shape, dtype=bool)
    for line in lines:
        for row, col in line.pixels():
            out[row, col] = True
    return out
