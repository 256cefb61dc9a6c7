"""
Path data model and polygon-to-path compilation.

A ``PathString`` is a sequence of drawing commands (move, line, quadratic
curve, close). ``str(path)`` renders it as SVG path data, which is what the
host drawing surface consumes.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

Point = Tuple[float, float]

MOVE = "M"
LINE = "L"
QUAD = "Q"
CLOSE = "Z"


def format_number(value: float) -> str:
    """Format a coordinate the way a JavaScript number prints."""
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


@dataclass(frozen=True)
class PathCommand:
    """Single drawing instruction with its coordinate arguments."""
    op: str
    coords: Tuple[float, ...] = ()

    @property
    def end_point(self) -> Optional[Point]:
        """Point the pen rests on after this command, None for close."""
        if not self.coords:
            return None
        return (self.coords[-2], self.coords[-1])

    def __str__(self) -> str:
        if not self.coords:
            return self.op
        return " ".join([self.op] + [format_number(c) for c in self.coords])


@dataclass
class PathString:
    """Compiled drawing instructions for one shape or connector."""
    commands: List[PathCommand] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> "PathString":
        self.commands.append(PathCommand(MOVE, (float(x), float(y))))
        return self

    def line_to(self, x: float, y: float) -> "PathString":
        self.commands.append(PathCommand(LINE, (float(x), float(y))))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "PathString":
        self.commands.append(PathCommand(QUAD, (float(cx), float(cy), float(x), float(y))))
        return self

    def close(self) -> "PathString":
        self.commands.append(PathCommand(CLOSE))
        return self

    @property
    def is_empty(self) -> bool:
        return not self.commands

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and self.commands[-1].op == CLOSE

    @property
    def start(self) -> Optional[Point]:
        """Point of the initial move-to."""
        if not self.commands:
            return None
        return self.commands[0].end_point

    @property
    def end(self) -> Optional[Point]:
        """Last point drawn to, ignoring a trailing close."""
        for command in reversed(self.commands):
            if command.end_point is not None:
                return command.end_point
        return None

    def is_finite(self) -> bool:
        """False when any coordinate is NaN or infinite; renderers skip such paths."""
        return all(math.isfinite(c) for command in self.commands for c in command.coords)

    def __str__(self) -> str:
        return " ".join(str(command) for command in self.commands)

    def __len__(self) -> int:
        return len(self.commands)


def is_straight_segment(seed: int, index: int, straight_percent: float) -> bool:
    """Deterministic straight-vs-curved decision for segment ``index``."""
    threshold = math.floor(straight_percent / 10)
    # Truncated remainder: negative seeds give negative digits
    return math.fmod(seed + index * 31, 10) < threshold


def points_to_path(points, seed: int = 0, straight_percent: float = 40) -> PathString:
    """
    Compile a polygon into a closed path mixing straight and curved borders.

    Each segment is a straight line to the current point or a quadratic curve
    through it, ending at the midpoint towards the next point. The closing
    segment uses the same rule with index ``len(points)``.

    Args:
        points: Sequence or array of [x, y] vertices
        seed: Generation seed
        straight_percent: Share of straight segments, 0-100

    Returns:
        Closed PathString, or an empty one for fewer than 2 points
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = len(pts)
    path = PathString()
    if n < 2:
        return path

    first = pts[0]
    path.move_to(first[0], first[1])

    for i in range(1, n):
        curr = pts[i]
        nxt = pts[(i + 1) % n]
        if is_straight_segment(seed, i, straight_percent):
            path.line_to(curr[0], curr[1])
        else:
            path.quad_to(curr[0], curr[1], (curr[0] + nxt[0]) / 2, (curr[1] + nxt[1]) / 2)

    last = pts[-1]
    if is_straight_segment(seed, n, straight_percent):
        path.line_to(first[0], first[1])
    else:
        path.quad_to(last[0], last[1], first[0], first[1])

    return path.close()
