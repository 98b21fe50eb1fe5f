"""Line merging.

Wires and symbol outlines usually arrive as many short polylines. Fragments
that meet end-to-end at a point no other fragment touches are fused into
one polyline so the drawing shows a single continuous stroke.

Points where three or more fragments meet (junctions) are never fused
through: linearizing a T or Y junction would lose the connectivity the
drawing is supposed to show. Nothing is reported for such points; callers
see the same output length as for an already minimal set.

Example::

    from sch2drawio.merge import merge_lines

    merge_lines([[(0, 0), (1, 1)], [(1, 1), (2, 2)]])
    # [[(0, 0), (1, 1), (2, 2)]]

    # Y junction: nothing merges
    merge_lines([[(0, 0), (1, 0)], [(1, 0), (2, 1)], [(1, 0), (2, -1)]])
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .types import Point

logger = logging.getLogger(__name__)

Polyline = List[Point]


def _touches(line: Sequence[Point], point: Point) -> bool:
    return line[0] == point or line[-1] == point


def _count_connections(
    lines: Sequence[Sequence[Point]],
    processed: Sequence[bool],
    merged: Sequence[Sequence[Point]],
    point: Point,
    i: int,
    j: int,
) -> int:
    """Count fragments other than *i* and *j* with an endpoint at *point*."""
    count = 0
    for k, line in enumerate(lines):
        if k == i or k == j or processed[k] or not line:
            continue
        if _touches(line, point):
            count += 1
    for chain in merged:
        if chain and _touches(chain, point):
            count += 1
    return count


def _join(current: Polyline, other: Sequence[Point]) -> Optional[Polyline]:
    """Shared endpoint of *current* and *other*, joined; ``None`` if disjoint.

    Checked in the order start-start, start-end, end-start, end-end.
    The shared point appears once in the result.
    """
    if current[0] == other[0]:
        return list(reversed(current))[:-1] + list(other)
    if current[0] == other[-1]:
        return list(other)[:-1] + current
    if current[-1] == other[0]:
        return current[:-1] + list(other)
    if current[-1] == other[-1]:
        return current[:-1] + list(reversed(other))
    return None


def _shared_point(current: Sequence[Point], other: Sequence[Point]) -> Optional[Point]:
    if current[0] == other[0] or current[0] == other[-1]:
        return current[0]
    if current[-1] == other[0] or current[-1] == other[-1]:
        return current[-1]
    return None


def merge_lines(lines: Sequence[Sequence[Point]]) -> List[Polyline]:
    """Fuse polylines that share an endpoint into maximal chains.

    Args:
        lines: Polylines of one group (one net, or one symbol layer).

    Returns:
        The merged polylines. Point order inside a chain may be reversed
        relative to the inputs. Empty inputs are dropped.

    Two fragments fuse only when no third unmerged fragment or finished
    chain also ends at the shared point. Interior points are preserved.
    """
    processed = [False] * len(lines)
    merged: List[Polyline] = []

    for i, line in enumerate(lines):
        if processed[i]:
            continue
        if not line:
            processed[i] = True
            continue

        current: Polyline = list(line)
        merged_this_round = True
        while merged_this_round:
            merged_this_round = False
            for j, other in enumerate(lines):
                if j == i or processed[j] or not other:
                    continue

                shared = _shared_point(current, other)
                if shared is None:
                    continue
                if _count_connections(lines, processed, merged, shared, i, j):
                    continue

                current = _join(current, other)
                processed[j] = True
                merged_this_round = True

        merged.append(current)
        processed[i] = True

    logger.debug("Merged %d lines into %d", len(lines), len(merged))
    return merged
