"""
Deterministic seed-to-float transforms used by every map generator.

Unlike a stateful PRNG stream, each draw here is a pure function of its
seed, so generators can address independent draws by seed offset
(``seed + i * 100``, ``seed + i * 200``...) and reproduce them in any order.
"""

from typing import Union

import numpy as np

SeedLike = Union[int, str]


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


def seeded_random(seed):
    """
    Map a seed to a float in [0, 1).

    Uses the fractional part of ``sin(seed) * 10000``. Works on plain numbers
    and on NumPy arrays of seeds.

    Args:
        seed: Number or array of numbers

    Returns:
        Float (or array of floats) in [0, 1)
    """
    if isinstance(seed, np.ndarray):
        x = np.sin(seed.astype(np.float64)) * 10000.0
        return x - np.floor(x)

    x = float(np.sin(float(seed))) * 10000.0
    return x - float(np.floor(x))


def hash_string(value: str) -> int:
    """
    Hash a string to an unsigned 32-bit integer seed.

    Rolling polynomial hash over UTF-16 code units: ``h = h * 31 + unit``
    truncated to 32 bits after every step. Lone surrogates hash as their
    own code unit.

    Args:
        value: Entity name or identifier

    Returns:
        Integer in [0, 2**32)
    """
    h = 0
    data = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _uint32(h * 31 + unit)
    return h


def seed_for(value: SeedLike) -> int:
    """Return ``value`` unchanged if it is an int, otherwise its string hash."""
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return int(value)
    return hash_string(str(value))
