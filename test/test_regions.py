import numpy as np
import pytest

from bubbleglyph.decide import Thresholds
from bubbleglyph.geometry import Rect
from bubbleglyph.regions import (
    adjacency_graph,
    adjacent_rectangles,
    bound_text,
    bounds_map,
    connected_groups,
    discover_clusters,
    find_bounding_rectangles,
    find_stripes,
    merge_overlapping,
)


def _blocks(shape, *rects):
    grid = np.zeros(shape, dtype=bool)
    for r in rects:
        grid[r.y:r.bottom, r.x:r.right] = True
    return grid


def _scattered():
    # four glyph parts that share every row/column stripe but never touch
    grid = np.zeros((7, 8), dtype=bool)
    grid[0:3, 0:2] = True
    grid[0:2, 4:7] = True
    grid[3:5, 6:8] = True
    grid[5:7, 2:5] = True
    return grid


def test_find_stripes():
    grid = _blocks((10, 10), Rect(1, 2, 2, 2), Rect(6, 5, 3, 3))
    assert find_stripes(grid, True) == [(2, 4), (5, 8)]
    assert find_stripes(grid, False) == [(1, 3), (6, 9)]
    assert find_stripes(np.zeros((3, 3), dtype=bool), True) == []


def test_bound_text_shrinks_to_ink():
    grid = _blocks((10, 10), Rect(3, 4, 2, 3))
    assert bound_text(grid, (0, 10), (0, 10)) == [Rect(3, 4, 2, 3)]
    assert bound_text(grid, (0, 3), (0, 10)) == []


def test_single_row_glyph_is_kept():
    grid = _blocks((5, 10), Rect(2, 2, 6, 1))
    assert find_bounding_rectangles(grid) == [Rect(2, 2, 6, 1)]


def test_touching_split_is_optional():
    grid = _scattered()
    assert find_bounding_rectangles(grid) == [Rect(0, 0, 8, 7)]
    parts = find_bounding_rectangles(grid, split_touching=True)
    assert sorted(r.as_tuple() for r in parts) == sorted([
        (0, 0, 2, 3), (4, 0, 3, 2), (6, 3, 2, 2), (2, 5, 3, 2)])


def test_two_separated_blocks_make_two_clusters():
    a, b = Rect(5, 5, 10, 10), Rect(35, 5, 10, 10)
    clusters = discover_clusters(_blocks((30, 60), a, b))
    assert len(clusters) == 2
    # right-to-left
    assert [c.bounds for c in clusters] == [b, a]
    assert [c.glyphs for c in clusters] == [[b], [a]]


def test_close_blocks_join_one_cluster():
    a, b = Rect(5, 5, 10, 10), Rect(20, 5, 10, 10)
    clusters = discover_clusters(_blocks((30, 60), a, b))
    assert len(clusters) == 1
    assert clusters[0].bounds == Rect(5, 5, 25, 10)
    assert sorted(r.x for r in clusters[0].glyphs) == [5, 20]


def test_unbounded_reach_joins_anything_in_line():
    a, b = Rect(5, 5, 10, 10), Rect(35, 5, 10, 10)
    clusters = discover_clusters(_blocks((30, 60), a, b), Thresholds(ADJACENCY_REACH=None))
    assert len(clusters) == 1
    assert clusters[0].bounds == Rect(5, 5, 40, 10)


def test_diagonal_blocks_are_not_adjacent():
    a, b = Rect(0, 0, 5, 5), Rect(7, 7, 5, 5)
    clusters = discover_clusters(_blocks((20, 20), a, b))
    assert len(clusters) == 2


def test_bounds_map_and_adjacency():
    rects = [Rect(0, 0, 4, 4), Rect(6, 0, 4, 4), Rect(0, 6, 4, 4)]
    bmap = bounds_map((12, 12), rects)
    assert bmap[0, 0] == 0 and bmap[2, 7] == 1 and bmap[5, 5] == -1
    assert adjacent_rectangles(rects[0], bmap) == {1, 2}
    assert adjacent_rectangles(rects[1], bmap) == {0}
    graph = adjacency_graph(rects, (12, 12))
    assert graph == [{1, 2}, {0}, {0}]


def test_connected_groups_cover_every_index_once():
    groups = connected_groups([{1}, {0}, set(), {4}, {3}])
    assert groups == [[0, 1], [2], [3, 4]]


def test_connected_groups_rejects_inconsistent_graph():
    with pytest.raises(RuntimeError):
        connected_groups([{1}, set(), {1}])


def test_merge_overlapping_reaches_fixed_point():
    boxes = [Rect(0, 0, 10, 10), Rect(5, 5, 10, 10), Rect(30, 30, 5, 5),
             Rect(40, 0, 10, 2), Rect(45, 1, 10, 10)]
    once = merge_overlapping(boxes)
    assert sorted(r.as_tuple() for r in once) == [(0, 0, 15, 15), (30, 30, 5, 5), (40, 0, 15, 11)]
    assert sorted(r.as_tuple() for r in merge_overlapping(once)) == sorted(r.as_tuple() for r in once)


def test_merge_cascades_through_union():
    # the union of the first two swallows the third
    boxes = [Rect(0, 0, 4, 4), Rect(3, 3, 4, 4), Rect(5, 0, 2, 2)]
    assert merge_overlapping(boxes) == [Rect(0, 0, 7, 7)]


def test_blank_and_empty_grids():
    assert discover_clusters(np.zeros((10, 10), dtype=bool)) == []
    assert discover_clusters(np.zeros((0, 0), dtype=bool)) == []
    with pytest.raises(ValueError):
        find_bounding_rectangles(np.zeros((2, 2, 2), dtype=bool))
