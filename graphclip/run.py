from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable

import numpy as np

from graphclip.config import DEFAULT_INTERPOLATION
from graphclip.sampling import Sample


@dataclass(frozen=True)
class Run:
    samples: tuple[Sample, ...]
    series: Hashable | None = None
    style: dict[str, Any] = field(default_factory=dict)
    interpolation: str = DEFAULT_INTERPOLATION
    functions: tuple[Callable[..., Any], ...] = ()

    def __post_init__(self) -> None:
        if not self.samples:
            raise ValueError("run must contain at least one sample")
        # Each run owns its style; siblings and the caller's mapping stay untouched.
        object.__setattr__(self, "style", dict(self.style))

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def is_area(self) -> bool:
        return self.samples[0].is_area

    def coords(self) -> list[tuple[float, ...]]:
        return [(s.x, *s.values) for s in self.samples]

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        x = np.asarray([s.x for s in self.samples], dtype=np.float64)
        values = np.asarray([s.values for s in self.samples], dtype=np.float64)
        return x, values


def functions_by_series(runs: Iterable[Run], series: Hashable) -> list[Callable[..., Any]]:
    found: list[Callable[..., Any]] = []
    for run in runs:
        if run.series != series:
            continue
        for fn in run.functions:
            if not any(fn is seen for seen in found):
                found.append(fn)
    return found
