# pipeline.py
# Orchestration: grid -> clusters -> furigana -> reading order -> glyph records,
# plus glob drivers that run image files through and write summaries.

from __future__ import annotations
import glob, logging, os
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List

import numpy as np

from .contour import ContourInfo, contour_info
from .decide import T, Direction, Thresholds, guess_direction
from .furigana import AnnotationMapping, resolve_annotations
from .geometry import Rect
from .io_save_load import load_grid, save_json
from .ordering import Gap, order_characters
from .regions import discover_clusters
from .strokes import stroke_paths
from .svg import write_svg

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Glyph:
    """One reading-order slot. Blank glyphs stand for breaks."""
    box: Rect
    mask: np.ndarray
    annotations: List[Rect] = field(default_factory=list)
    blank: bool = False

    @cached_property
    def contour(self) -> ContourInfo:
        return contour_info(self.mask)

    def feature(self, mode: str = "full", group_size: int = T.GROUP_SIZE) -> np.ndarray:
        """Feature vector for the classifier; Empty glyphs give zeros."""
        info = self.contour
        if mode == "full":
            return info.full_grouped_dimensions(group_size)
        if mode == "half":
            return info.half_grouped_dimensions(group_size)
        raise ValueError(f"mode must be 'full' or 'half', got {mode!r}")

    def strokes(self, horizontal_lines: bool, t: Thresholds = T):
        return stroke_paths(self.mask, horizontal_lines,
                            overlap_percent=t.OVERLAP_PERCENT, min_slices=t.MIN_LINE_SLICES)


@dataclass
class TextSet:
    bounds: Rect
    direction: Direction
    glyphs: List[Glyph] = field(default_factory=list)
    annotations: AnnotationMapping = field(default_factory=dict)

    @property
    def characters(self) -> List[Glyph]:
        return [g for g in self.glyphs if not g.blank]

# ----------------------------
# Core: one decoded grid
# ----------------------------

def read_grid(grid: np.ndarray, t: Thresholds = T) -> List[TextSet]:
    """
    Run region discovery, furigana resolution and reading order over a bool grid.
    The grid is only read.
    """
    grid = np.asarray(grid, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2-D, got shape {grid.shape}")
    sets: List[TextSet] = []
    for cluster in discover_clusters(grid, t):
        direction = guess_direction(cluster.bounds, t)
        full, mapping = resolve_annotations(cluster.glyphs, direction, t)
        glyphs = []
        for slot in order_characters(full, direction, t):
            if isinstance(slot, Gap):
                # a break holds no ink of its own, even where furigana sit in it
                blank = np.zeros((slot.box.height, slot.box.width), dtype=bool)
                glyphs.append(Glyph(slot.box, blank, blank=True))
            else:
                glyphs.append(Glyph(slot, slot.crop(grid), list(mapping.get(slot, []))))
        sets.append(TextSet(cluster.bounds, direction, glyphs, mapping))
        logger.debug("cluster %s (%s): %d glyphs, %d with furigana",
                     cluster.bounds.as_tuple(), direction.value, len(full), len(mapping))
    return sets

def records(text_sets: List[TextSet], mode: str = "full", group_size: int = T.GROUP_SIZE) -> List[Dict]:
    """Flatten TextSets into per-glyph rows for the classifier."""
    rows: List[Dict] = []
    for ci, ts in enumerate(text_sets):
        for g in ts.glyphs:
            rows.append({
                "cluster": ci,
                "direction": ts.direction.value,
                "bbox": list(g.box.as_tuple()),
                "blank": g.blank,
                "annotations": [list(a.as_tuple()) for a in g.annotations],
                "feature": [round(float(v), 6) for v in g.feature(mode, group_size)],
            })
    return rows

# ----------------------------
# Batch drivers
# ----------------------------

def process_glob(input_glob: str, out_json: str = "out/glyphs.json", mode: str = "full",
                 t: Thresholds = T) -> List[Dict]:
    """
    For each image file: binarise, read, collect per-glyph rows.
    Writes a JSON summary and returns the rows for notebook use.
    """
    rows: List[Dict] = []
    for path in sorted(glob.glob(input_glob)):
        grid = load_grid(path)
        text_sets = read_grid(grid, t)
        file_rows = records(text_sets, mode, t.GROUP_SIZE)
        logger.info("%s: %d clusters, %d slots", os.path.basename(path), len(text_sets), len(file_rows))
        rows.extend({"file": os.path.basename(path), **r} for r in file_rows)
    save_json(out_json, {"results": rows})
    return rows

def export_overlays(input_glob: str, out_dir: str = "out/overlays", t: Thresholds = T) -> List[str]:
    """
    SVG overlay per image: clusters, glyph boxes, gaps, furigana and the thinned
    strokes running along each cluster's reading direction.
    """
    os.makedirs(out_dir, exist_ok=True)
    written: List[str] = []
    for path in sorted(glob.glob(input_glob)):
        grid = load_grid(path)
        text_sets = read_grid(grid, t)
        strokes = [(g.box, g.strokes(ts.direction is Direction.LTR, t))
                   for ts in text_sets for g in ts.characters]
        out_svg = os.path.join(out_dir, os.path.splitext(os.path.basename(path))[0] + "_glyphs.svg")
        written.append(write_svg(text_sets, size=grid.shape[::-1], out_path=out_svg, strokes=strokes))
    return written
