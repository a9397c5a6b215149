from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable, Mapping, Sequence

from graphclip.aggregate import SeriesAggregator, SeriesPoint
from graphclip.clipping import ClippingAssembler
from graphclip.config import (
    DEFAULT_INTERPOLATION,
    DEFAULT_STROKE_WIDTH,
    GraphConfig,
)
from graphclip.crossing import BoundaryCrossingSolver
from graphclip.errors import EmptyInputError, InvalidFunctionError
from graphclip.run import Run
from graphclip.sampling import CurveSampler, Sample, is_number
from graphclip.viewport import Viewport

LOGGER = logging.getLogger(__name__)

# Sampled curves shorter than this are not worth a path element.
MIN_CURVE_RUN_SAMPLES = 3


def line_style(style: Mapping[str, Any] | None) -> dict[str, Any]:
    out = dict(style or {})
    if not is_number(out.get("stroke-width")):
        out["stroke-width"] = DEFAULT_STROKE_WIDTH
    return out


class Graph:
    def __init__(self, config: GraphConfig | None = None) -> None:
        self.config = config or GraphConfig()
        self.viewport: Viewport = self.config.viewport()
        self.solver = BoundaryCrossingSolver(self.viewport.y_min, self.viewport.y_max)
        self.sampler = CurveSampler(
            self.viewport,
            pixel_width=self.config.plot_width,
            spacing_px=self.config.sample_spacing_px,
        )
        self._curve_clipper = ClippingAssembler(self.solver, min_run_samples=MIN_CURVE_RUN_SAMPLES)
        self._coords_clipper = ClippingAssembler(self.solver)
        self._aggregator = SeriesAggregator(self.viewport)

    def line_from_function(
        self,
        name: Hashable,
        f: Callable[[float], float],
        *,
        style: Mapping[str, Any] | None = None,
        resolution: int | None = None,
        interpolation: str | None = None,
        x_range: tuple[float, float] | None = None,
    ) -> list[Run]:
        samples = self.sampler.sample(f, x_range=x_range, resolution=resolution)
        if samples[0].is_area:
            raise InvalidFunctionError("line function must return a single number")
        runs = self._curve_clipper.clip(
            samples,
            self.viewport,
            f,
            series=name,
            style=line_style(style),
            interpolation=interpolation or DEFAULT_INTERPOLATION,
            functions=(f,),
        )
        LOGGER.debug("line %r: %d sample(s) -> %d run(s)", name, len(samples), len(runs))
        return runs

    def area_between(
        self,
        name: Hashable,
        f_bottom: Callable[[float], float],
        f_top: Callable[[float], float],
        *,
        style: Mapping[str, Any] | None = None,
        resolution: int | None = None,
        interpolation: str | None = None,
        x_range: tuple[float, float] | None = None,
    ) -> list[Run]:
        for label, fn in (("bottom", f_bottom), ("top", f_top)):
            if not callable(fn):
                raise InvalidFunctionError(f"{label} function must be callable")
        samples = self.sampler.sample((f_bottom, f_top), x_range=x_range, resolution=resolution)
        runs = self._curve_clipper.clip(
            samples,
            self.viewport,
            series=name,
            style=line_style(style),
            interpolation=interpolation or DEFAULT_INTERPOLATION,
            functions=(f_bottom, f_top),
        )
        LOGGER.debug("area %r: %d sample(s) -> %d run(s)", name, len(samples), len(runs))
        return runs

    def line_from_coordinates(
        self,
        name: Hashable,
        coords: Sequence[Sequence[float]],
        *,
        style: Mapping[str, Any] | None = None,
        interpolation: str | None = None,
    ) -> list[Run]:
        if not coords:
            raise EmptyInputError("no coordinates")
        ordered = sorted(coords, key=lambda c: c[0])
        samples = [Sample(x=float(c[0]), values=(float(c[1]),)) for c in ordered]
        return self._coords_clipper.clip(
            samples,
            self.viewport,
            search_crossings=False,
            series=name,
            style=line_style(style),
            interpolation=interpolation or DEFAULT_INTERPOLATION,
        )

    def lines_from_points(
        self,
        points: Iterable[SeriesPoint],
        *,
        style: Mapping[str, Any] | None = None,
        interpolation: str | None = None,
    ) -> dict[Hashable, list[Run]]:
        shared = line_style(style)
        # Stroke colour always comes from the series.
        shared.pop("stroke", None)
        return self._aggregator.aggregate(
            points,
            style=shared,
            interpolation=interpolation or DEFAULT_INTERPOLATION,
        )
