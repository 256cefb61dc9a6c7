"""Procedural world-map engine: seeded shapes, roads and an interactive viewport."""

__version__ = "0.1.0"
