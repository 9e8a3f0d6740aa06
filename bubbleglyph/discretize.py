# discretize.py
# Point grids, outlines and density maps over a binary glyph grid.
# Dependencies: numpy, scikit-image

from __future__ import annotations
from typing import Optional

import numpy as np
from skimage.segmentation import find_boundaries
from skimage.util import view_as_blocks, view_as_windows

from .binarise import pad_white
from .decide import T


def discretize_points(grid: np.ndarray, point_size: int = T.POINT_SIZE,
                      point_density: float = T.POINT_DENSITY) -> np.ndarray:
    """
    Reduce the grid to (h // point_size, w // point_size) points. A point is set
    when at least `point_density` of its block is foreground; partial blocks on
    the right/bottom edges are dropped.
    """
    g = np.asarray(grid, dtype=bool)
    h, w = g.shape[0] // point_size, g.shape[1] // point_size
    if h == 0 or w == 0:
        return np.zeros((h, w), dtype=bool)
    blocks = view_as_blocks(g[:h * point_size, :w * point_size], (point_size, point_size))
    return blocks.mean(axis=(2, 3)) >= point_density

def boxize_points(grid: np.ndarray, point_size: int = T.POINT_SIZE,
                  point_density: float = T.POINT_DENSITY) -> np.ndarray:
    """
    Like discretize_points() but keeps the grid's size: the box anchored at every
    pixel (extending right and down, background past the edge) is tested.
    """
    g = np.asarray(grid, dtype=bool)
    if g.size == 0:
        return g.copy()
    padded = np.pad(g, ((0, point_size - 1), (0, point_size - 1)), constant_values=False)
    windows = view_as_windows(padded, (point_size, point_size))
    return windows.mean(axis=(2, 3)) >= point_density

def outline(grid: np.ndarray) -> np.ndarray:
    """Foreground pixels touching background (4-neighbour) or the image edge."""
    g = np.asarray(grid, dtype=bool)
    if g.size == 0:
        return g.copy()
    edges = find_boundaries(pad_white(g, 1), connectivity=1, mode='inner')
    return edges[1:-1, 1:-1] & g

def density_map(grid: np.ndarray, rows: int, cols: int) -> Optional[np.ndarray]:
    """
    Foreground fraction of each cell in a rows x cols split. Cells are equal-sized,
    so trailing pixels on the right/bottom edges are left out.
    None when the grid is too small for the requested cells.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"density map needs positive rows/cols, got {rows}x{cols}")
    g = np.asarray(grid, dtype=bool)
    dr, dc = g.shape[0] // rows, g.shape[1] // cols
    if dr == 0 or dc == 0:
        return None
    return view_as_blocks(g[:dr * rows, :dc * cols], (dr, dc)).mean(axis=(2, 3))

def density_map_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Mean squared error between two density maps."""
    a = np.asarray(a, dtype=np.float64); b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"density maps differ in shape: {a.shape} vs {b.shape}")
    return float(np.mean((a - b) ** 2))
