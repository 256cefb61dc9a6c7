"""Winding connector (road) paths between two map points."""

import math
from typing import List

from .paths import PathString, Point
from .prng import seeded_random

SHORT_ROUTE_DISTANCE = 50.0


def _road_waypoints(
    start: Point, end: Point, seed: int, curviness: float, segments: int
) -> List[Point]:
    """
    Interior waypoints bracketed by the two endpoints.

    Perpendicular offsets follow a ``sin(pi * t)`` envelope so they vanish at
    both ends and peak mid-route. A smaller longitudinal jitter keeps the
    waypoints from sitting on an even spacing.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    distance = math.hypot(dx, dy)
    ux, uy = dx / distance, dy / distance
    perp_x, perp_y = -uy, ux

    waypoints = [start]
    for i in range(1, segments):
        t = i / segments
        base_x = start[0] + dx * t
        base_y = start[1] + dy * t

        max_offset = distance * curviness * 0.4 * math.sin(t * math.pi)
        offset = max_offset * (seeded_random(seed + i * 137) * 2 - 1)
        long_offset = distance * curviness * 0.1 * (seeded_random(seed + i * 73) - 0.5)

        waypoints.append((
            base_x + perp_x * offset + ux * long_offset,
            base_y + perp_y * offset + uy * long_offset,
        ))
    waypoints.append(end)
    return waypoints


def generate_road_path(
    start,
    end,
    seed: int = 0,
    curviness: float = 0.3,
    segments: int = 3,
) -> PathString:
    """
    Generate a winding road from ``start`` to ``end``.

    Short routes (under 50 units, or fewer than 2 segments) get a single
    quadratic curve bowed to one side. Longer routes pass near jittered
    waypoints and curve into the exact destination.

    Args:
        start: Starting point (x, y)
        end: Ending point (x, y)
        seed: Generation seed
        curviness: 0 for straight, 1 for very curvy
        segments: Number of curve segments

    Returns:
        Open PathString starting at ``start`` and ending at ``end``
    """
    start = (float(start[0]), float(start[1]))
    end = (float(end[0]), float(end[1]))

    dx = end[0] - start[0]
    dy = end[1] - start[1]
    distance = math.hypot(dx, dy)

    path = PathString().move_to(*start)

    # No direction to bend along
    if distance == 0:
        return path.line_to(*end)

    perp_x = -dy / distance
    perp_y = dx / distance

    if distance < SHORT_ROUTE_DISTANCE or segments < 2:
        mid_x = (start[0] + end[0]) / 2
        mid_y = (start[1] + end[1]) / 2
        curve_offset = distance * curviness * (seeded_random(seed) - 0.5)
        return path.quad_to(
            mid_x + perp_x * curve_offset,
            mid_y + perp_y * curve_offset,
            end[0],
            end[1],
        )

    waypoints = _road_waypoints(start, end, seed, curviness, segments)
    last = len(waypoints) - 1

    for i in range(1, len(waypoints)):
        prev = waypoints[i - 1]
        curr = waypoints[i]
        if i == last:
            wobble = distance * curviness * 0.15
            control_x = (prev[0] + curr[0]) / 2 + perp_x * (seeded_random(seed + i * 50) - 0.5) * wobble
            control_y = (prev[1] + curr[1]) / 2 + perp_y * (seeded_random(seed + i * 51) - 0.5) * wobble
            path.quad_to(control_x, control_y, curr[0], curr[1])
        else:
            nxt = waypoints[i + 1]
            path.quad_to(curr[0], curr[1], (curr[0] + nxt[0]) / 2, (curr[1] + nxt[1]) / 2)

    return path
