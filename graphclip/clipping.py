from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from graphclip.crossing import BoundaryCrossingSolver
from graphclip.errors import EmptyInputError
from graphclip.run import Run
from graphclip.sampling import Sample
from graphclip.viewport import Viewport

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_RUN_SAMPLES = 2


def segment_interpolant(a: Sample, b: Sample) -> Callable[[float], float]:
    if b.x == a.x:
        return lambda x: a.y
    slope = (b.y - a.y) / (b.x - a.x)
    return lambda x: a.y + (x - a.x) * slope


class ClippingAssembler:
    def __init__(
        self,
        solver: BoundaryCrossingSolver | None = None,
        *,
        min_run_samples: int = DEFAULT_MIN_RUN_SAMPLES,
    ) -> None:
        if min_run_samples < 1:
            raise ValueError("min_run_samples must be >= 1")
        self.solver = solver
        self.min_run_samples = int(min_run_samples)

    def clip(
        self,
        samples: Sequence[Sample],
        viewport: Viewport,
        function: Callable[[float], float] | None = None,
        *,
        search_crossings: bool = True,
        **run_metadata: Any,
    ) -> list[Run]:
        if not samples:
            raise EmptyInputError("no samples to clip")
        if viewport.allow_overflow:
            return [Run(samples=tuple(samples), **run_metadata)]

        solver = self.solver or BoundaryCrossingSolver(viewport.y_min, viewport.y_max)
        runs: list[Run] = []
        current: list[Sample] = []
        prev: Sample | None = None
        prev_in = False

        for sample in samples:
            if sample.is_area:
                kept = _clamp_area(sample, viewport)
                if kept is None:
                    self._close(current, runs, run_metadata)
                    current = []
                else:
                    current.append(kept)
                prev = sample
                continue

            inside = viewport.contains(sample.x, sample.y)
            if inside:
                if prev is not None and not prev_in and search_crossings:
                    crossing = self._crossing(prev, sample, viewport, solver, function)
                    if crossing is not None:
                        current.append(crossing)
                current.append(sample)
            else:
                if current:
                    if prev is not None and search_crossings:
                        crossing = self._crossing(prev, sample, viewport, solver, function)
                        if crossing is not None:
                            current.append(crossing)
                    self._close(current, runs, run_metadata)
                current = []
            prev = sample
            prev_in = inside

        self._close(current, runs, run_metadata)
        return runs

    def _crossing(
        self,
        a: Sample,
        b: Sample,
        viewport: Viewport,
        solver: BoundaryCrossingSolver,
        function: Callable[[float], float] | None,
    ) -> Sample | None:
        f = function if function is not None else segment_interpolant(a, b)
        x = solver.find_crossing(f, a.x, b.x)
        if x is None or not viewport.contains_x(x):
            return None
        # The crossing sits within tolerance of the edge; pin it onto the window.
        return Sample(x=x, values=(viewport.clamp_y(f(x)),))

    def _close(self, current: list[Sample], runs: list[Run], run_metadata: dict[str, Any]) -> None:
        if not current:
            return
        if len(current) < self.min_run_samples:
            LOGGER.debug(
                "dropping run of %d sample(s) at x=%s (minimum %d)",
                len(current),
                current[0].x,
                self.min_run_samples,
            )
            return
        runs.append(Run(samples=tuple(current), **run_metadata))


def _clamp_area(sample: Sample, viewport: Viewport) -> Sample | None:
    if not viewport.contains_x(sample.x):
        return None
    bottom, top = sample.values
    bottom_in = viewport.contains_y(bottom)
    top_in = viewport.contains_y(top)
    if bottom_in and top_in:
        return sample
    if not bottom_in and not top_in:
        return None
    bottom = viewport.clamp_y(bottom)
    top = viewport.clamp_y(top)
    if top <= bottom:
        return None
    return Sample(x=sample.x, values=(bottom, top))
