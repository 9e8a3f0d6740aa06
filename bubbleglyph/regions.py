# regions.py
# Region discovery: glyph bounding rectangles, adjacency clustering and
# overlap merging into text clusters.
# Dependencies: numpy, scikit-image

from __future__ import annotations
import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import List, Set, Tuple

import numpy as np
from skimage.measure import label as sklabel, regionprops

from .decide import T, Thresholds
from .geometry import Rect, bounding_union, runs

logger = logging.getLogger(__name__)

Stripe = Tuple[int, int]   # [start, end) scan-line indices


@dataclass
class TextCluster:
    bounds: Rect
    glyphs: List[Rect] = field(default_factory=list)

    def merge(self, other: "TextCluster") -> "TextCluster":
        return TextCluster(self.bounds.union(other.bounds), self.glyphs + other.glyphs)

# --- Stage A: bounding rectangles --------------------------------------------

def find_stripes(grid: np.ndarray, horizontal: bool) -> List[Stripe]:
    """Maximal runs of rows (horizontal=True) or columns holding any foreground."""
    has_content = grid.any(axis=1 if horizontal else 0)
    return [(s, e + 1) for s, e in runs(has_content)]

def bound_text(grid: np.ndarray, row_stripe: Stripe, col_stripe: Stripe,
               split_touching: bool = False) -> List[Rect]:
    """
    Shrink one stripe intersection to the box around its foreground.
    Glyphs sharing an intersection end up in a single box unless
    `split_touching` labels its 8-connected components separately.
    """
    r0, r1 = row_stripe
    c0, c1 = col_stripe
    sub = grid[r0:r1, c0:c1]
    if not sub.any():
        return []
    if split_touching:
        out = []
        for prop in regionprops(sklabel(sub, connectivity=2)):
            min_r, min_c, max_r, max_c = prop.bbox
            out.append(Rect(c0 + min_c, r0 + min_r, max_c - min_c, max_r - min_r))
        return out
    ys, xs = np.nonzero(sub)
    return [Rect(c0 + int(xs.min()), r0 + int(ys.min()),
                 int(xs.max() - xs.min()) + 1, int(ys.max() - ys.min()) + 1)]

def find_bounding_rectangles(grid: np.ndarray, split_touching: bool = False) -> List[Rect]:
    """Candidate glyph boxes: one per non-empty row/column stripe intersection."""
    grid = np.asarray(grid, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2-D, got shape {grid.shape}")
    rects: List[Rect] = []
    for row_stripe in find_stripes(grid, True):
        for col_stripe in find_stripes(grid, False):
            rects.extend(bound_text(grid, row_stripe, col_stripe, split_touching))
    return rects

# --- Stage B: adjacency ------------------------------------------------------

def bounds_map(shape: Tuple[int, int], rects: List[Rect]) -> np.ndarray:
    """Pixel -> index of the covering rect, -1 for none (later rects win)."""
    out = np.full(shape, -1, dtype=np.int32)
    for i, r in enumerate(rects):
        out[r.y:r.bottom, r.x:r.right] = i
    return out

def _first_hit(ray: np.ndarray) -> int | None:
    hits = np.flatnonzero(ray != -1)
    return int(ray[hits[0]]) if hits.size else None

def adjacent_rectangles(rect: Rect, bmap: np.ndarray, reach: float | None = T.ADJACENCY_REACH) -> Set[int]:
    """
    Indices of rects struck by axis-aligned rays cast outward from every
    boundary row and column of `rect`. With `reach`, a ray travels at most
    reach x (rect's extent along the ray) pixels; otherwise to the image edge.
    """
    H, W = bmap.shape
    h_len = W if reach is None else math.ceil(reach * rect.width)
    v_len = H if reach is None else math.ceil(reach * rect.height)
    found: Set[int] = set()
    for row in range(max(rect.y, 0), min(rect.bottom, H)):
        for ray in (bmap[row, rect.right:rect.right + h_len],
                    bmap[row, max(rect.x - h_len, 0):max(rect.x, 0)][::-1]):
            hit = _first_hit(ray)
            if hit is not None:
                found.add(hit)
    for col in range(max(rect.x, 0), min(rect.right, W)):
        for ray in (bmap[rect.bottom:rect.bottom + v_len, col],
                    bmap[max(rect.y - v_len, 0):max(rect.y, 0), col][::-1]):
            hit = _first_hit(ray)
            if hit is not None:
                found.add(hit)
    return found

def adjacency_graph(rects: List[Rect], shape: Tuple[int, int],
                    reach: float | None = T.ADJACENCY_REACH) -> List[Set[int]]:
    """Symmetric adjacency list over rect indices."""
    bmap = bounds_map(shape, rects)
    graph: List[Set[int]] = [set() for _ in rects]
    for i, r in enumerate(rects):
        for j in adjacent_rectangles(r, bmap, reach):
            if j != i:
                graph[i].add(j); graph[j].add(i)
    return graph

def connected_groups(graph: List[Set[int]]) -> List[List[int]]:
    """Breadth-first components; every index lands in exactly one group."""
    owner = [-1] * len(graph)
    groups: List[List[int]] = []
    for seed in range(len(graph)):
        if owner[seed] != -1:
            continue
        gid = len(groups); group: List[int] = []
        q = deque([seed])
        while q:
            node = q.popleft()
            if owner[node] == gid:
                continue
            if owner[node] != -1:
                raise RuntimeError(f"rect {node} already belongs to finished group {owner[node]}")
            owner[node] = gid
            group.append(node)
            q.extend(n for n in graph[node] if owner[n] != gid)
        groups.append(group)
    return groups

def group_bounds(groups: List[List[int]], rects: List[Rect]) -> List[TextCluster]:
    out = []
    for group in groups:
        members = [rects[i] for i in group]
        box = bounding_union(members)
        if box is not None:
            out.append(TextCluster(box, members))
    return out

# --- Stage B: overlap merging ------------------------------------------------

def merge_clusters(clusters: List[TextCluster]) -> List[TextCluster]:
    """Union any two intersecting clusters, restarting after each merge."""
    out = list(clusters)
    changed = True
    while changed:
        changed = False
        for i in range(len(out)):
            for j in range(i + 1, len(out)):
                if out[i].bounds.intersects(out[j].bounds):
                    merged = out[i].merge(out[j])
                    out = [c for k, c in enumerate(out) if k not in (i, j)] + [merged]
                    changed = True
                    break
            if changed:
                break
    return out

def merge_overlapping(boxes: List[Rect]) -> List[Rect]:
    """merge_clusters() on bare boxes."""
    return [c.bounds for c in merge_clusters([TextCluster(b, [b]) for b in boxes])]

def cluster_order_key(cluster: TextCluster):
    # right-to-left, then top-to-bottom
    return (-cluster.bounds.right, cluster.bounds.y)

# --- public API --------------------------------------------------------------

def discover_clusters(grid: np.ndarray, t: Thresholds = T) -> List[TextCluster]:
    """
    Find every glyph box in `grid`, group boxes reachable from one another and
    merge overlapping groups. Clusters come back right-to-left.
    """
    grid = np.asarray(grid, dtype=bool)
    rects = find_bounding_rectangles(grid, split_touching=t.SPLIT_TOUCHING)
    if not rects:
        return []
    graph = adjacency_graph(rects, grid.shape, t.ADJACENCY_REACH)
    groups = connected_groups(graph)
    clusters = merge_clusters(group_bounds(groups, rects))
    clusters.sort(key=cluster_order_key)
    logger.debug("%d glyph boxes -> %d groups -> %d clusters", len(rects), len(groups), len(clusters))
    return clusters
