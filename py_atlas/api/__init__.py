"""HTTP surface for the map engine."""
