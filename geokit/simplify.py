"""Douglas-Peucker line simplification."""

from __future__ import annotations

from geokit.calculation import point_to_segment_distance
from geokit.constants import SRID
from geokit.geometry import LineString


def _removable_indices(line: LineString, threshold: float, srid: SRID) -> set[int]:
    removed: set[int] = set()
    stack = [0, len(line) - 1]
    while len(stack) > 1:
        start, end = stack[-2], stack[-1]
        max_dist, max_index = 0.0, 0
        for i in range(start + 1, end):
            dist, _ = point_to_segment_distance(line[i], line[start], line[end], srid)
            if dist > max_dist:
                max_dist, max_index = dist, i
        if end - start > 1 and max_dist > threshold:
            stack[-1] = max_index
            stack.extend((max_index, end))
        else:
            removed.update(range(start + 1, end))
            del stack[-2:]
    return removed


def douglas_peucker_simplify(line: LineString, threshold: float, srid: SRID) -> LineString:
    """Return a simplified copy of ``line`` keeping points farther than ``threshold``."""
    if not line:
        return LineString()
    removed = _removable_indices(line, threshold, srid)
    return LineString(p for i, p in enumerate(line) if i not in removed)