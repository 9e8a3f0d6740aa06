# ordering.py
# Reading-order linearisation: stacks/rows of glyph boxes, ordered for the
# cluster's direction, with Gap placeholders at word/clause breaks.

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Union

from .decide import T, Direction, Thresholds, is_break, upper_median
from .geometry import Rect


@dataclass(frozen=True)
class Gap:
    """Blank slot standing for a break between two glyphs."""
    box: Rect

Slot = Union[Rect, Gap]


def interval_groups(rects: List[Rect], axis: str) -> List[List[Rect]]:
    """
    Group boxes whose [start, end) spans on `axis` ("x" or "y") chain-overlap.
    Groups come back in increasing axis order.
    """
    if axis == "x":
        span = lambda r: (r.x, r.right)
    elif axis == "y":
        span = lambda r: (r.y, r.bottom)
    else:
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")

    groups: List[List[Rect]] = []
    reach = None
    for r in sorted(rects, key=span):
        lo, hi = span(r)
        if reach is not None and lo < reach:
            groups[-1].append(r)
            reach = max(reach, hi)
        else:
            groups.append([r]); reach = hi
    return groups

def vertical_stacks(rects: List[Rect]) -> List[List[Rect]]:
    """Columns of horizontally-overlapping boxes, each ordered top to bottom, left to right."""
    return [sorted(g, key=lambda r: (r.y, r.x)) for g in interval_groups(rects, "x")]

def horizontal_rows(rects: List[Rect]) -> List[List[Rect]]:
    """Rows of vertically-overlapping boxes, each ordered left to right, top to bottom."""
    return [sorted(g, key=lambda r: (r.x, r.y)) for g in interval_groups(rects, "y")]


def _span_box(group: List[Rect]) -> Rect:
    box = group[0]
    for r in group[1:]:
        box = box.union(r)
    return box

def _with_breaks(seq: List[Rect], vertical: bool, extent: float, t: Thresholds) -> List[Slot]:
    """Insert a Gap wherever consecutive boxes are further apart than the break threshold."""
    out: List[Slot] = []
    for prev, nxt in zip([None] + seq[:-1], seq):
        if prev is not None:
            if vertical:
                gap = nxt.y - prev.bottom
                if is_break(gap, extent, t):
                    out.append(Gap(Rect(prev.x, prev.bottom, prev.width, gap)))
            else:
                gap = nxt.x - prev.right
                if is_break(gap, extent, t):
                    out.append(Gap(Rect(prev.right, prev.y, gap, prev.height)))
        out.append(nxt)
    return out

def order_characters(rects: List[Rect], direction: Direction, t: Thresholds = T) -> List[Slot]:
    """
    Reading order for one cluster's full glyphs.
      DOWN: columns right-to-left, each top-to-bottom.
      LTR:  rows top-to-bottom, each left-to-right.
    Gaps go in where the spacing exceeds BREAK_GAP_RATIO of the median glyph
    height (within a column / between rows) or width (within a row / between columns).
    """
    if not rects:
        return []
    med_w = upper_median([r.width for r in rects])
    med_h = upper_median([r.height for r in rects])

    if direction is Direction.DOWN:
        lines = list(reversed(vertical_stacks(rects)))
        inner_extent, outer_extent = med_h, med_w
    else:
        lines = horizontal_rows(rects)
        inner_extent, outer_extent = med_w, med_h
    inner_vertical = direction is Direction.DOWN

    out: List[Slot] = []
    prev_box = None
    for line in lines:
        box = _span_box(line)
        if prev_box is not None:
            if inner_vertical:
                gap = prev_box.x - box.right
                if is_break(gap, outer_extent, t):
                    top = min(prev_box.y, box.y)
                    bottom = max(prev_box.bottom, box.bottom)
                    out.append(Gap(Rect(box.right, top, gap, bottom - top)))
            else:
                gap = box.y - prev_box.bottom
                if is_break(gap, outer_extent, t):
                    left = min(prev_box.x, box.x)
                    right = max(prev_box.right, box.right)
                    out.append(Gap(Rect(left, prev_box.bottom, right - left, gap)))
        out.extend(_with_breaks(line, inner_vertical, inner_extent, t))
        prev_box = box
    return out
