"""Backend independent path model built from move and cubic commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Union

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


class MoveTo(NamedTuple):
    point: Point


class CubicTo(NamedTuple):
    """Cubic Bezier from the current point through two control points."""

    control1: Point
    control2: Point
    end: Point


PathCommand = Union[MoveTo, CubicTo]


@dataclass
class ArcPath:
    """Ordered list of path commands, consumed by a canvas backend."""

    commands: List[PathCommand] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(MoveTo(Point(float(x), float(y))))

    def cubic_to(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None:
        self.commands.append(
            CubicTo(
                Point(float(x1), float(y1)),
                Point(float(x2), float(y2)),
                Point(float(x3), float(y3)),
            )
        )

    @property
    def segments(self) -> List[CubicTo]:
        return [c for c in self.commands if isinstance(c, CubicTo)]

    @property
    def is_empty(self) -> bool:
        return not self.commands

    def anchor_points(self) -> np.ndarray:
        """Return the start point and every segment end point as ``(N, 2)``."""
        pts = [
            c.point if isinstance(c, MoveTo) else c.end for c in self.commands
        ]
        if not pts:
            return np.empty((0, 2), dtype=np.float64)
        return np.asarray(pts, dtype=np.float64)

    def sample(self, points_per_segment: int = 16) -> np.ndarray:
        """Evaluate every cubic segment at ``points_per_segment`` parameters.

        The returned ``(N, 2)`` array starts with each sub-path's move-to
        point and omits ``t = 0`` of each curve, so consecutive segments do
        not repeat their shared boundary point.
        """
        n = max(1, int(points_per_segment))
        t = np.linspace(0.0, 1.0, n + 1)[1:, None]
        mt = 1.0 - t
        b0 = mt**3
        b1 = 3.0 * mt * mt * t
        b2 = 3.0 * mt * t * t
        b3 = t**3

        chunks: List[np.ndarray] = []
        current = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                current = np.asarray(cmd.point, dtype=np.float64)
                chunks.append(current[None, :])
                continue
            if current is None:
                raise ValueError("Path segment has no start point.")
            c1 = np.asarray(cmd.control1, dtype=np.float64)
            c2 = np.asarray(cmd.control2, dtype=np.float64)
            end = np.asarray(cmd.end, dtype=np.float64)
            chunks.append(b0 * current + b1 * c1 + b2 * c2 + b3 * end)
            current = end

        if not chunks:
            return np.empty((0, 2), dtype=np.float64)
        return np.concatenate(chunks, axis=0)


__all__ = ["Point", "MoveTo", "CubicTo", "PathCommand", "ArcPath"]
