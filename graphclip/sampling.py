from __future__ import annotations

from dataclasses import dataclass
import math
import numbers
from typing import Callable, Sequence, Union

import numpy as np

from graphclip.config import (
    DEFAULT_MIN_RESOLUTION,
    DEFAULT_SAMPLE_SPACING_PX,
    DEFAULT_X_SNAP_TOLERANCE,
)
from graphclip.errors import EmptyInputError, InvalidFunctionError
from graphclip.viewport import Viewport


ScalarFunction = Callable[[float], float]
PairFunction = Callable[[float], Sequence[float]]
CurveFunction = Union[ScalarFunction, PairFunction, tuple[ScalarFunction, ScalarFunction]]


@dataclass(frozen=True)
class Sample:
    x: float
    values: tuple[float, ...]

    @property
    def y(self) -> float:
        return self.values[0]

    @property
    def is_area(self) -> bool:
        return len(self.values) == 2


def is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, np.floating, np.integer))


def as_curve(f: CurveFunction) -> Callable[[float], tuple[float, ...]]:
    """Wrap a scalar, paired or (bottom, top) function into one returning a value tuple."""
    if isinstance(f, tuple):
        if len(f) != 2 or not all(callable(g) for g in f):
            raise InvalidFunctionError("paired function must be a (bottom, top) tuple of callables")
        bottom, top = f
        return lambda x: (bottom(x), top(x))
    if not callable(f):
        raise InvalidFunctionError("function must be callable")

    def evaluate(x: float) -> tuple[float, ...]:
        out = f(x)
        if isinstance(out, (tuple, list, np.ndarray)):
            return tuple(out)
        return (out,)

    return evaluate


def _evaluate(curve: Callable[[float], tuple[float, ...]], x: float) -> tuple[float, ...]:
    try:
        values = curve(x)
    except Exception as exc:
        raise InvalidFunctionError(f"function failed at x={x!r}: {exc}") from exc
    _check_output(values)
    return values


def _check_output(values: tuple[float, ...]) -> None:
    if len(values) not in (1, 2) or not all(is_number(v) for v in values):
        raise InvalidFunctionError(
            f"function must return a number or a (bottom, top) pair of numbers, got {values!r}"
        )


class CurveSampler:
    def __init__(
        self,
        viewport: Viewport,
        pixel_width: float,
        *,
        spacing_px: float = DEFAULT_SAMPLE_SPACING_PX,
        min_resolution: int = DEFAULT_MIN_RESOLUTION,
        snap_tolerance: float = DEFAULT_X_SNAP_TOLERANCE,
    ) -> None:
        if pixel_width <= 0:
            raise ValueError("pixel_width must be > 0")
        if spacing_px <= 0:
            raise ValueError("spacing_px must be > 0")
        if min_resolution < 2:
            raise ValueError("min_resolution must be >= 2")
        self.viewport = viewport
        self.pixel_width = float(pixel_width)
        self.spacing_px = float(spacing_px)
        self.min_resolution = int(min_resolution)
        self.snap_tolerance = float(snap_tolerance)

    def resolve_resolution(self, x_range: tuple[float, float], resolution: int | None = None) -> int:
        if resolution is None or not is_number(resolution):
            ratio = (x_range[1] - x_range[0]) / self.viewport.width
            resolution = math.floor(ratio * self.pixel_width / self.spacing_px)
        return max(self.min_resolution, int(resolution))

    def x_grid(self, x_range: tuple[float, float], resolution: int) -> np.ndarray:
        lo, hi = x_range
        increment = (hi - lo) / (resolution - 1)
        xs = lo + increment * np.arange(resolution, dtype=np.float64)
        # Floating-point drift must not keep the last sample off the requested edge.
        if abs(xs[-1] - hi) < self.snap_tolerance:
            xs[-1] = hi
        return xs

    def sample(
        self,
        f: CurveFunction,
        x_range: tuple[float, float] | None = None,
        resolution: int | None = None,
    ) -> list[Sample]:
        curve = as_curve(f)
        if x_range is None:
            x_range = (self.viewport.x_min, self.viewport.x_max)
        if len(x_range) != 2:
            raise ValueError("x_range must be a (min, max) pair")
        lo, hi = self.viewport.clamp_x_range(x_range)
        if hi <= lo:
            raise EmptyInputError(f"x_range {tuple(x_range)!r} has no overlap with the viewport")
        _evaluate(curve, lo)

        count = self.resolve_resolution((lo, hi), resolution)
        samples: list[Sample] = []
        for x in self.x_grid((lo, hi), count).tolist():
            values = _evaluate(curve, x)
            samples.append(Sample(x=x, values=tuple(float(v) for v in values)))
        return samples
