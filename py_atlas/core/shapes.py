"""Organic region outlines and polygon helpers."""

from typing import NamedTuple

import numpy as np

from .prng import seeded_random


class Bounds(NamedTuple):
    """Axis-aligned bounding box."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float


def generate_organic_shape(
    center_x: float,
    center_y: float,
    base_radius: float,
    sides: int = 8,
    randomness: float = 0.3,
    seed: int = 0,
) -> np.ndarray:
    """
    Generate an irregular closed polygon around a center point.

    Each vertex is placed on an evenly stepped angle, then both its angle and
    its radius are perturbed. The two perturbations draw from different seed
    offsets (``i * 100`` and ``i * 200``) so they are not correlated.

    Args:
        center_x: Center X coordinate
        center_y: Center Y coordinate
        base_radius: Radius before perturbation
        sides: Number of vertices
        randomness: Perturbation strength, 0 gives a regular polygon
        seed: Generation seed

    Returns:
        Array of shape (sides, 2) with [x, y] vertex coordinates
    """
    if sides <= 0:
        return np.empty((0, 2), dtype=np.float64)

    angle_step = (np.pi * 2) / sides
    i = np.arange(sides, dtype=np.float64)

    angle_variation = (seeded_random(seed + i * 100) - 0.5) * randomness * 0.8
    angles = angle_step * i + angle_variation

    # Radius stays within (1 - randomness*0.6) .. (1 + randomness*0.6) of base
    radius_variation = 1.0 + (seeded_random(seed + i * 200) - 0.5) * randomness * 1.2
    radii = base_radius * radius_variation

    xs = center_x + np.cos(angles) * radii
    ys = center_y + np.sin(angles) * radii
    return np.column_stack((xs, ys))


def get_bounds(points) -> Bounds:
    """Bounding box of a point list; all zeros when empty."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 0:
        return Bounds(0.0, 0.0, 0.0, 0.0)

    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)
    return Bounds(float(min_x), float(max_x), float(min_y), float(max_y))


def point_in_bounds(bounds: Bounds, padding: float = 50, seed: int = 0) -> np.ndarray:
    """
    Pick a deterministic point inside ``bounds`` keeping ``padding`` from the edges.

    Returns:
        Array [x, y]
    """
    span_x = bounds.max_x - bounds.min_x - padding * 2
    span_y = bounds.max_y - bounds.min_y - padding * 2
    x = bounds.min_x + padding + seeded_random(seed) * span_x
    y = bounds.min_y + padding + seeded_random(seed + 1) * span_y
    return np.array([x, y])
