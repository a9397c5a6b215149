from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from graphclip.errors import InvalidRangeError


@dataclass(frozen=True)
class Viewport:
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    allow_overflow: bool = False

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidRangeError(f"{name} must be finite")
        if self.x_min >= self.x_max:
            raise InvalidRangeError("x_min must be < x_max")
        if self.y_min >= self.y_max:
            raise InvalidRangeError("y_min must be < y_max")

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains_x(self, x: float) -> bool:
        return self.x_min <= x <= self.x_max

    def contains_y(self, y: float) -> bool:
        return self.y_min <= y <= self.y_max

    def contains(self, x: float, y: float) -> bool:
        return self.contains_x(x) and self.contains_y(y)

    def contains_mask(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        return (x >= self.x_min) & (x <= self.x_max) & (y >= self.y_min) & (y <= self.y_max)

    def clamp_x_range(self, x_range: tuple[float, float]) -> tuple[float, float]:
        lo, hi = float(x_range[0]), float(x_range[1])
        return (max(lo, self.x_min), min(hi, self.x_max))

    def clamp_y(self, y: float) -> float:
        return min(max(y, self.y_min), self.y_max)
