import pytest

from bubbleglyph.decide import Direction, Thresholds, guess_direction
from bubbleglyph.geometry import Rect
from bubbleglyph.ordering import Gap, horizontal_rows, interval_groups, order_characters, vertical_stacks


def test_guess_direction():
    assert guess_direction(Rect(0, 0, 10, 31)) is Direction.DOWN
    assert guess_direction(Rect(0, 0, 10, 30)) is Direction.LTR
    assert guess_direction(Rect(0, 0, 10, 21), Thresholds(VERTICAL_ASPECT=2.0)) is Direction.DOWN


def test_interval_groups_chain():
    rects = [Rect(0, 0, 5, 5), Rect(4, 10, 5, 5), Rect(20, 0, 5, 5)]
    assert interval_groups(rects, "x") == [[Rect(0, 0, 5, 5), Rect(4, 10, 5, 5)], [Rect(20, 0, 5, 5)]]
    assert len(interval_groups(rects, "y")) == 2
    with pytest.raises(ValueError):
        interval_groups(rects, "z")


def test_stacks_and_rows_sort_inside():
    rects = [Rect(0, 12, 10, 10), Rect(0, 0, 10, 10)]
    assert vertical_stacks(rects) == [[Rect(0, 0, 10, 10), Rect(0, 12, 10, 10)]]
    assert horizontal_rows(rects) == [[Rect(0, 0, 10, 10)], [Rect(0, 12, 10, 10)]]


def test_vertical_text_reads_columns_right_to_left():
    left = [Rect(18, 0, 10, 10), Rect(18, 12, 10, 10)]
    right = [Rect(30, 12, 10, 10), Rect(30, 0, 10, 10)]
    order = order_characters(left + right, Direction.DOWN)
    assert order == [Rect(30, 0, 10, 10), Rect(30, 12, 10, 10),
                     Rect(18, 0, 10, 10), Rect(18, 12, 10, 10)]


def test_wide_column_spacing_inserts_gap():
    rects = [Rect(0, 0, 10, 10), Rect(30, 0, 10, 10)]
    order = order_characters(rects, Direction.DOWN)
    assert order == [Rect(30, 0, 10, 10), Gap(Rect(10, 0, 20, 10)), Rect(0, 0, 10, 10)]


def test_break_inside_a_column():
    rects = [Rect(0, 0, 10, 10), Rect(0, 12, 10, 10), Rect(0, 40, 10, 10)]
    order = order_characters(rects, Direction.DOWN)
    assert order == [Rect(0, 0, 10, 10), Rect(0, 12, 10, 10), Gap(Rect(0, 22, 10, 18)), Rect(0, 40, 10, 10)]
    assert Gap(Rect(0, 22, 10, 18)) not in order_characters(rects, Direction.DOWN, Thresholds(BREAK_GAP_RATIO=2.0))


def test_horizontal_text_reads_rows():
    rects = [Rect(12, 14, 10, 10), Rect(0, 0, 10, 10), Rect(0, 14, 10, 10), Rect(12, 0, 10, 10)]
    assert order_characters(rects, Direction.LTR) == [
        Rect(0, 0, 10, 10), Rect(12, 0, 10, 10), Rect(0, 14, 10, 10), Rect(12, 14, 10, 10)]


def test_word_break_in_a_row():
    rects = [Rect(0, 0, 10, 10), Rect(25, 0, 10, 10)]
    assert order_characters(rects, Direction.LTR) == [
        Rect(0, 0, 10, 10), Gap(Rect(10, 0, 15, 10)), Rect(25, 0, 10, 10)]


def test_nothing_to_order():
    assert order_characters([], Direction.DOWN) == []
