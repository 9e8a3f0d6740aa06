# bubbleglyph/__init__.py

# I/O
from .io_save_load import load_gray, load_grid, save_json, ascii_grid
from .binarise import to_grid

# Geometry
from .geometry import SlicePiece, Slice, Rect, absolute_overlap_percent

# Strokes
from .strokes import (
    Line,
    character_slices,
    slices_to_lines,
    prune_lines,
    single_path_lines,
    get_lines,
    stroke_paths,
    draw_lines,
)

# Regions, furigana & reading order
from .regions import TextCluster, find_bounding_rectangles, merge_overlapping, discover_clusters
from .furigana import resolve_annotations
from .ordering import Gap, order_characters

# Features
from .contour import (
    DIRECTIONS,
    FeatureKind,
    DirectionalFeature,
    ContourInfo,
    contour_info,
    directional_feature,
    feature_distance,
)
from .discretize import (
    discretize_points,
    boxize_points,
    outline,
    density_map,
    density_map_distance,
)

# Decisions
from .decide import Thresholds, Direction, guess_direction  # tune here if needed

# Pipeline
from .pipeline import Glyph, TextSet, read_grid, records, process_glob, export_overlays
