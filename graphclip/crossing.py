"""Locate where a sampled function crosses a horizontal viewport edge.

The walk is heuristic: it follows the local slope between the last two probes
instead of assuming monotonicity, so a function that wiggles inside one sample
interval may yield ``None`` or a crossing other than the nearest one. Callers
render without an exact boundary point when no crossing is found.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from graphclip.config import DEFAULT_CROSSING_TOLERANCE, DEFAULT_MAX_CROSSING_ITERATIONS

LOGGER = logging.getLogger(__name__)


def straddled_edge(y1: float, y2: float, y_min: float, y_max: float) -> float | None:
    if (y1 < y_min) != (y2 < y_min):
        return y_min
    if (y1 > y_max) != (y2 > y_max):
        return y_max
    return None


def find_crossing(
    f: Callable[[float], float],
    x1: float,
    x2: float,
    edge_value: float,
    *,
    tolerance: float = DEFAULT_CROSSING_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_CROSSING_ITERATIONS,
) -> float | None:
    if x2 < x1:
        x1, x2 = x2, x1
    last_x = x1
    last_y = f(x1)
    if abs(last_y - edge_value) < tolerance:
        return x1
    step = 0.5 * (x2 - x1)
    x = x1 + step
    for _ in range(max_iterations):
        y = f(x)
        if abs(y - edge_value) < tolerance:
            return x
        increasing = (x > last_x) == (y > last_y)
        if (y > edge_value) != (last_y > edge_value):
            step *= 0.5
        last_x, last_y = x, y
        if y > edge_value:
            x += -step if increasing else step
        else:
            x += step if increasing else -step
        if x < x1 or x > x2:
            return None
    return None


@dataclass(frozen=True)
class BoundaryCrossingSolver:
    y_min: float
    y_max: float
    tolerance: float = DEFAULT_CROSSING_TOLERANCE
    max_iterations: int = DEFAULT_MAX_CROSSING_ITERATIONS

    def __post_init__(self) -> None:
        if self.y_min >= self.y_max:
            raise ValueError("y_min must be < y_max")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be > 0")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be > 0")

    def edge_between(self, y1: float, y2: float) -> float | None:
        return straddled_edge(y1, y2, self.y_min, self.y_max)

    def find_crossing(self, f: Callable[[float], float], x1: float, x2: float) -> float | None:
        edge = self.edge_between(f(x1), f(x2))
        if edge is None:
            return None
        x = find_crossing(
            f,
            x1,
            x2,
            edge,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )
        if x is None:
            LOGGER.debug("no crossing of y=%s found between x=%s and x=%s", edge, x1, x2)
        return x
