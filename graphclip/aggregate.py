from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
from typing import Any, Hashable, Iterable

import numpy as np

from graphclip.errors import EmptyInputError
from graphclip.run import Run
from graphclip.sampling import Sample
from graphclip.viewport import Viewport

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_POINT_RUN = 2


@dataclass(frozen=True)
class SeriesPoint:
    series: Hashable
    x: float
    y: float
    weight: int = 1
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.weight < 1:
            raise ValueError("weight must be >= 1")


def merge_point(acc: SeriesPoint, point: SeriesPoint) -> SeriesPoint:
    weight = acc.weight + point.weight
    y = (acc.y * acc.weight + point.y * point.weight) / weight
    return replace(acc, y=y, weight=weight)


def group_by_series(points: Iterable[SeriesPoint]) -> dict[Hashable, list[SeriesPoint]]:
    groups: dict[Hashable, list[SeriesPoint]] = {}
    for point in points:
        groups.setdefault(point.series, []).append(point)
    return groups


class SeriesAggregator:
    def __init__(
        self,
        viewport: Viewport | None = None,
        *,
        min_run_samples: int = DEFAULT_MIN_POINT_RUN,
    ) -> None:
        if min_run_samples < 1:
            raise ValueError("min_run_samples must be >= 1")
        self.viewport = viewport
        self.min_run_samples = int(min_run_samples)

    def merge(self, points: Iterable[SeriesPoint]) -> dict[Hashable, list[SeriesPoint]]:
        groups = self._groups(points)
        return {series: self._merge_sorted(sorted(group, key=_x_key)) for series, group in groups.items()}

    def aggregate(self, points: Iterable[SeriesPoint], **run_metadata: Any) -> dict[Hashable, list[Run]]:
        groups = self._groups(points)
        clip = self.viewport is not None and not self.viewport.allow_overflow
        out: dict[Hashable, list[Run]] = {}
        for series, group in groups.items():
            ordered = sorted(group, key=_x_key)
            if not clip:
                pieces = [ordered]
            else:
                pieces = self._cut_outside(ordered)
            runs: list[Run] = []
            for piece in pieces:
                merged = self._merge_sorted(piece)
                if len(merged) < self.min_run_samples:
                    LOGGER.debug("series %r: dropping run of %d point(s)", series, len(merged))
                    continue
                runs.append(
                    Run(
                        samples=tuple(Sample(x=p.x, values=(p.y,)) for p in merged),
                        series=series,
                        **run_metadata,
                    )
                )
            if runs:
                out[series] = runs
        return out

    def _groups(self, points: Iterable[SeriesPoint]) -> dict[Hashable, list[SeriesPoint]]:
        points = list(points)
        if not points:
            raise EmptyInputError("no points to aggregate")
        finite = [p for p in points if math.isfinite(p.x) and math.isfinite(p.y)]
        if len(finite) != len(points):
            LOGGER.debug("ignoring %d non-finite point(s)", len(points) - len(finite))
        return group_by_series(finite)

    def _cut_outside(self, ordered: list[SeriesPoint]) -> list[list[SeriesPoint]]:
        assert self.viewport is not None
        pieces: list[list[SeriesPoint]] = []
        current: list[SeriesPoint] = []
        inside = self.viewport.contains_mask(
            np.asarray([p.x for p in ordered], dtype=np.float64),
            np.asarray([p.y for p in ordered], dtype=np.float64),
        )
        for point, keep in zip(ordered, inside.tolist(), strict=True):
            if keep:
                current.append(point)
            else:
                if current:
                    pieces.append(current)
                current = []
        if current:
            pieces.append(current)
        return pieces

    @staticmethod
    def _merge_sorted(ordered: list[SeriesPoint]) -> list[SeriesPoint]:
        merged: list[SeriesPoint] = []
        for point in ordered:
            if merged and merged[-1].x == point.x:
                merged[-1] = merge_point(merged[-1], point)
            else:
                merged.append(point)
        return merged


def _x_key(point: SeriesPoint) -> float:
    return point.x
