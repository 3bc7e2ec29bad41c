'''
Arithmetic on Sublime Text window layouts, e.g.

    {"cols": [0.0, 0.25, 1.0], "rows": [0.0, 1.0], "cells": [[0, 0, 1, 1], [1, 0, 2, 1]]}

`cols`/`rows` are split points in [0.0, 1.0]; each cell is [x1, y1, x2, y2]
in indices of those lists; a group is the index of a cell.
'''
from __future__ import annotations
from typing import Optional

from .common import first
from .config import Side

MIN_FRACTION = 0.1
MAX_FRACTION = 0.9

SINGLE_LAYOUT = {"cols": [0.0, 1.0], "rows": [0.0, 1.0], "cells": [[0, 0, 1, 1]]}


def single_layout():
    return {key: [list(c) for c in v] if key == 'cells' else list(v) for key, v in SINGLE_LAYOUT.items()}


def size_fraction(size, extent):
    '''
    size    float is a fraction already, int is pixels
    extent  pixels available along the split axis
    return float within [MIN_FRACTION, MAX_FRACTION]
    '''
    if isinstance(size, float):
        width = size
    elif extent > 0:
        width = size / extent
    else:
        width = MIN_FRACTION
    return round(max(MIN_FRACTION, min(MAX_FRACTION, width)), 4)


def _axes(side: Side):
    '''return (key of split points, index of x1/y1 in a cell, key of the other axis)'''
    return ('cols', 0, 'rows') if side.horizontal else ('rows', 1, 'cols')


def split_layout(layout, side: Side, fraction: float) -> tuple[dict, int]:
    '''
    Add one group spanning the whole `side` of the layout, `fraction` thick.
    Existing groups keep their numbers, the new one is appended last.

    Returns (new_layout, new_group).
    '''
    key, lo, other_key = _axes(side)
    hi = lo + 2
    points = layout[key]
    cells = [list(c) for c in layout['cells']]
    span = len(layout[other_key]) - 1

    if side.leading:
        new_points = [0.0, fraction] + [round(fraction + p * (1 - fraction), 6) for p in points[1:]]
        for c in cells:
            c[lo] += 1
            c[hi] += 1
        edge = (0, 1)
    else:
        new_points = [round(p * (1 - fraction), 6) for p in points[:-1]] + [round(1 - fraction, 6), 1.0]
        n = len(new_points) - 1
        edge = (n - 1, n)
    new_points[-1] = 1.0

    new_cell = [0, 0, 0, 0]
    new_cell[lo], new_cell[hi] = edge
    new_cell[1 - lo], new_cell[3 - lo] = 0, span
    cells.append(new_cell)

    new_layout = dict(layout)
    new_layout[key] = new_points
    new_layout['cells'] = cells
    return new_layout, len(cells) - 1


def edge_side(layout, group) -> Optional[Side]:
    '''Side of the layout `group` fills completely and alone, if any'''
    cells = layout['cells']
    if not 0 <= group < len(cells) or len(cells) < 2:
        return None
    cell = cells[group]
    others = [c for i, c in enumerate(cells) if i != group]
    for side in Side:
        key, lo, other_key = _axes(side)
        hi = lo + 2
        last = len(layout[key]) - 1
        if (cell[1 - lo], cell[3 - lo]) != (0, len(layout[other_key]) - 1):
            continue
        if side.leading and (cell[lo], cell[hi]) == (0, 1):
            if all(c[lo] >= 1 for c in others):
                return side
        elif not side.leading and (cell[lo], cell[hi]) == (last - 1, last):
            if all(c[hi] <= last - 1 for c in others):
                return side
    return None


def remove_group(layout, group) -> Optional[dict]:
    '''
    Inverse of split_layout for any group that is an edge group;
    None if removing it would leave a hole.
    '''
    side = edge_side(layout, group)
    if side is None:
        return None
    key, lo, _ = _axes(side)
    hi = lo + 2
    points = layout[key]
    cells = [list(c) for i, c in enumerate(layout['cells']) if i != group]

    if side.leading:
        width = points[1]
        new_points = [0.0] + [round((p - width) / (1 - width), 6) for p in points[2:]]
        for c in cells:
            c[lo] -= 1
            c[hi] -= 1
    else:
        width = 1 - points[-2]
        new_points = [round(p / (1 - width), 6) for p in points[:-2]] + [1.0]
    new_points[0], new_points[-1] = 0.0, 1.0

    new_layout = dict(layout)
    new_layout[key] = new_points
    new_layout['cells'] = cells
    return new_layout


def _touching(a, b) -> bool:
    '''cells share a piece of an edge'''
    cross_x = a[0] < b[2] and b[0] < a[2]
    cross_y = a[1] < b[3] and b[1] < a[3]
    return (cross_y and (a[2] == b[0] or b[2] == a[0])) or (cross_x and (a[3] == b[1] or b[3] == a[1]))


def merge_target(layout, group, keep=()) -> Optional[int]:
    '''
    Group that takes over the views of `group` when it is removed: a
    neighbour if there is one, any other group otherwise, never one of `keep`.
    None if there is no such group.
    '''
    cells = layout['cells']
    if not 0 <= group < len(cells):
        return None
    candidates = [i for i in range(len(cells)) if i != group and i not in keep]
    neighbour = first(candidates, lambda i: _touching(cells[group], cells[i]))
    if neighbour is not None:
        return neighbour
    return candidates[0] if candidates else None
