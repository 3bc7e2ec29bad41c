import pytest

from dired_sidebar import Side
from dired_sidebar.layout import (
    edge_side, merge_target, remove_group, single_layout, size_fraction, split_layout)

TWO_COLUMNS = {
    "cols": [0.0, 0.5, 1.0],
    "rows": [0.0, 1.0],
    "cells": [[0, 0, 1, 1], [1, 0, 2, 1]],
}


def test_split_single_layout_left():
    layout, group = split_layout(single_layout(), Side.LEFT, 0.25)

    assert group == 1
    assert layout['cols'] == [0.0, 0.25, 1.0]
    assert layout['rows'] == [0.0, 1.0]
    assert layout['cells'] == [[1, 0, 2, 1], [0, 0, 1, 1]]


def test_split_single_layout_right():
    layout, group = split_layout(single_layout(), Side.RIGHT, 0.25)

    assert group == 1
    assert layout['cols'] == [0.0, 0.75, 1.0]
    assert layout['cells'] == [[0, 0, 1, 1], [1, 0, 2, 1]]


def test_split_single_layout_below():
    layout, group = split_layout(single_layout(), Side.BELOW, 0.2)

    assert layout['cols'] == [0.0, 1.0]
    assert layout['rows'] == [0.0, 0.8, 1.0]
    assert layout['cells'][group] == [0, 1, 1, 2]


def test_split_above_spans_all_columns():
    layout, group = split_layout(TWO_COLUMNS, Side.ABOVE, 0.5)

    assert layout['rows'] == [0.0, 0.5, 1.0]
    assert layout['cells'][group] == [0, 0, 2, 1]
    assert layout['cells'][:2] == [[0, 1, 1, 2], [1, 1, 2, 2]]


def test_split_keeps_original_untouched():
    original = single_layout()

    split_layout(original, Side.LEFT, 0.3)

    assert original == single_layout()


@pytest.mark.parametrize('side', list(Side))
def test_remove_split_group_restores_layout(side):
    layout, group = split_layout(TWO_COLUMNS, side, 0.25)

    assert edge_side(layout, group) == side
    restored = remove_group(layout, group)

    assert restored['cells'] == TWO_COLUMNS['cells']
    assert restored['cols'] == pytest.approx(TWO_COLUMNS['cols'])
    assert restored['rows'] == pytest.approx(TWO_COLUMNS['rows'])


def test_middle_group_cannot_be_removed():
    three = {
        "cols": [0.0, 0.3, 0.6, 1.0],
        "rows": [0.0, 1.0],
        "cells": [[0, 0, 1, 1], [1, 0, 2, 1], [2, 0, 3, 1]],
    }

    assert edge_side(three, 1) is None
    assert remove_group(three, 1) is None


def test_sole_group_cannot_be_removed():
    assert remove_group(single_layout(), 0) is None


def test_remove_first_of_two_columns():
    layout = remove_group(TWO_COLUMNS, 0)

    assert layout == single_layout()


@pytest.mark.parametrize('size, extent, expected', [
    (0.25, 1000, 0.25),
    (250, 1000, 0.25),
    (20, 1000, 0.1),
    (2000, 1000, 0.9),
    (300, 0, 0.1),
    (0.95, 1000, 0.9),
])
def test_size_fraction(size, extent, expected):
    assert size_fraction(size, extent) == pytest.approx(expected)


def test_origin_next_to_sidebar_only_has_no_merge_target():
    layout, sidebar = split_layout(single_layout(), Side.LEFT, 0.25)

    assert merge_target(layout, 0, keep={sidebar}) is None


def test_merge_target_skips_sidebar_group():
    layout, sidebar = split_layout(TWO_COLUMNS, Side.LEFT, 0.25)

    assert merge_target(layout, 0, keep={sidebar}) == 1
    assert merge_target(layout, 1, keep={sidebar}) == 0


def test_merge_target_prefers_neighbour():
    three = {
        "cols": [0.0, 0.3, 0.6, 1.0],
        "rows": [0.0, 1.0],
        "cells": [[0, 0, 1, 1], [1, 0, 2, 1], [2, 0, 3, 1]],
    }

    assert merge_target(three, 2) == 1
    assert merge_target(three, 0, keep={1}) == 2


def test_merge_target_of_unknown_group():
    assert merge_target(TWO_COLUMNS, 5) is None
