from bubbleglyph.decide import Direction, Thresholds, furigana_candidates, upper_median
from bubbleglyph.furigana import most_overlapping, resolve_annotations
from bubbleglyph.geometry import Rect


def test_upper_median():
    assert upper_median([4, 10]) == 10
    assert upper_median([3, 1, 2]) == 2


def test_candidates_are_narrower_than_half_the_median():
    rects = [Rect(0, 0, 10, 10), Rect(0, 12, 10, 10), Rect(11, 2, 4, 4), Rect(0, 24, 6, 10)]
    assert furigana_candidates(rects) == [Rect(11, 2, 4, 4)]
    assert furigana_candidates([]) == []
    assert furigana_candidates(rects, Thresholds(FURIGANA_WIDTH_RATIO=0.7)) == [Rect(11, 2, 4, 4), Rect(0, 24, 6, 10)]


def test_most_overlapping():
    target = Rect(20, 5, 3, 10)
    a, b = Rect(0, 0, 10, 8), Rect(0, 10, 10, 10)
    assert most_overlapping(target, [a, b]) == b
    assert most_overlapping(Rect(0, 40, 2, 2), [a, b]) is None
    assert most_overlapping(target, [a, b], Rect.horizontal_overlap) is None
    assert most_overlapping(Rect(8, 30, 6, 2), [Rect(0, 0, 10, 8), Rect(9, 0, 10, 8)], Rect.horizontal_overlap) == Rect(9, 0, 10, 8)


def test_furigana_beside_vertical_text_attaches():
    h1, h2 = Rect(0, 0, 10, 10), Rect(0, 12, 10, 10)
    furi = Rect(11, 13, 4, 6)
    full, mapping = resolve_annotations([h1, furi, h2], Direction.DOWN)
    assert full == [h1, h2]
    assert mapping == {h2: [furi]}


def test_far_candidate_reverts_to_full_glyph():
    h1, h2 = Rect(0, 0, 10, 10), Rect(0, 12, 10, 10)
    far = Rect(16, 13, 4, 6)
    full, mapping = resolve_annotations([h1, h2, far], Direction.DOWN)
    assert mapping == {}
    assert full == [h1, h2, far]


def test_candidate_without_overlap_reverts_in_vertical_text():
    host = Rect(0, 10, 10, 10)
    above = Rect(2, 0, 4, 4)
    full, mapping = resolve_annotations([above, host], Direction.DOWN)
    assert mapping == {}
    assert full == [host, above]


def test_candidate_above_horizontal_text_attaches():
    host = Rect(10, 10, 10, 10)
    above = Rect(13, 3, 4, 4)
    full, mapping = resolve_annotations([above, host], Direction.LTR)
    assert full == [host]
    assert mapping == {host: [above]}


def test_candidate_far_above_or_below_reverts():
    host, neighbour = Rect(10, 10, 10, 10), Rect(22, 10, 10, 10)
    high = Rect(13, 0, 4, 4)     # 6 rows clear of the host
    below = Rect(13, 22, 4, 4)
    full, mapping = resolve_annotations([high, host, neighbour, below], Direction.LTR)
    assert mapping == {}
    assert full == [host, neighbour, high, below]


def test_reverted_candidates_do_not_host_others():
    hosts = [Rect(0, 0, 10, 10), Rect(0, 12, 10, 10), Rect(0, 24, 10, 10)]
    lone = Rect(40, 40, 4, 4)
    near_lone = Rect(45, 40, 3, 4)
    full, mapping = resolve_annotations(hosts + [lone, near_lone], Direction.DOWN)
    assert mapping == {}
    assert full[-2:] == [lone, near_lone]


def test_each_annotation_has_exactly_one_host():
    hosts = [Rect(0, y, 10, 10) for y in (0, 11, 22, 33)]
    furi = [Rect(11, 1, 4, 4), Rect(11, 5, 4, 4), Rect(11, 24, 4, 6)]
    full, mapping = resolve_annotations(hosts + furi, Direction.DOWN)
    listed = [a for annotations in mapping.values() for a in annotations]
    assert sorted(map(Rect.as_tuple, listed)) == sorted(map(Rect.as_tuple, furi))
    assert len(listed) == len(set(listed))
    assert not set(listed) & set(full)
    assert mapping[hosts[0]] == furi[:2]
    assert mapping[hosts[2]] == [furi[2]]


def test_empty_cluster():
    assert resolve_annotations([]) == ([], {})


def test_candidate_between_rows_attaches_to_the_glyph_below():
    upper, lower = Rect(13, 0, 10, 10), Rect(14, 19, 10, 10)
    furi = Rect(13, 13, 4, 4)   # overlaps `upper` by more columns
    full, mapping = resolve_annotations([upper, furi, lower], Direction.LTR)
    assert full == [upper, lower]
    assert mapping == {lower: [furi]}
