from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
import tomllib
from typing import Any

from graphclip.viewport import Viewport

LOGGER = logging.getLogger(__name__)

DEFAULT_SAMPLE_SPACING_PX = 20.0
DEFAULT_MIN_RESOLUTION = 2
DEFAULT_CROSSING_TOLERANCE = 1e-6
DEFAULT_MAX_CROSSING_ITERATIONS = 100
DEFAULT_X_SNAP_TOLERANCE = 1e-5
DEFAULT_INTERPOLATION = "linear"
DEFAULT_STROKE_WIDTH = 1.5

DEFAULT_AXIS_MIN = 0.0
DEFAULT_AXIS_MAX = 100.0
DEFAULT_WIDTH = 600
DEFAULT_HEIGHT = 400
DEFAULT_MARGINS = {"left": 40, "right": 20, "top": 20, "bottom": 40}

_KNOWN_KEYS = {"allow_overflow", "width", "height", "sample_spacing_px", "axis", "margins"}


@dataclass(frozen=True)
class Margins:
    left: int = DEFAULT_MARGINS["left"]
    right: int = DEFAULT_MARGINS["right"]
    top: int = DEFAULT_MARGINS["top"]
    bottom: int = DEFAULT_MARGINS["bottom"]


@dataclass(frozen=True)
class GraphConfig:
    x_min: float = DEFAULT_AXIS_MIN
    x_max: float = DEFAULT_AXIS_MAX
    y_min: float = DEFAULT_AXIS_MIN
    y_max: float = DEFAULT_AXIS_MAX
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    margins: Margins = Margins()
    allow_overflow: bool = False
    sample_spacing_px: float = DEFAULT_SAMPLE_SPACING_PX

    def __post_init__(self) -> None:
        if self.sample_spacing_px <= 0 or not math.isfinite(self.sample_spacing_px):
            raise ValueError("sample_spacing_px must be > 0")
        if self.plot_width <= 0 or self.plot_height <= 0:
            raise ValueError("width/height must exceed the margins")

    @property
    def plot_width(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def plot_height(self) -> int:
        return self.height - self.margins.top - self.margins.bottom

    def viewport(self) -> Viewport:
        return Viewport(
            x_min=self.x_min,
            x_max=self.x_max,
            y_min=self.y_min,
            y_max=self.y_max,
            allow_overflow=self.allow_overflow,
        )


def load_graph_config(path: str | Path) -> GraphConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"graph config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return graph_config_from_mapping(raw)


def graph_config_from_mapping(raw: dict[str, Any]) -> GraphConfig:
    for key in sorted(set(raw) - _KNOWN_KEYS):
        LOGGER.warning("ignoring unknown graph config key: %s", key)

    axis = _coerce_table(raw.get("axis", {}), "axis")
    x_axis = _coerce_table(axis.get("x", {}), "axis.x")
    y_axis = _coerce_table(axis.get("y", {}), "axis.y")
    margins_raw = _coerce_table(raw.get("margins", {}), "margins")

    margins = Margins(
        left=_coerce_int(margins_raw.get("left", DEFAULT_MARGINS["left"]), "margins.left"),
        right=_coerce_int(margins_raw.get("right", DEFAULT_MARGINS["right"]), "margins.right"),
        top=_coerce_int(margins_raw.get("top", DEFAULT_MARGINS["top"]), "margins.top"),
        bottom=_coerce_int(margins_raw.get("bottom", DEFAULT_MARGINS["bottom"]), "margins.bottom"),
    )
    allow_overflow = raw.get("allow_overflow", False)
    if not isinstance(allow_overflow, bool):
        raise ValueError("allow_overflow must be a boolean")
    return GraphConfig(
        x_min=_coerce_float(x_axis.get("min", DEFAULT_AXIS_MIN), "axis.x.min"),
        x_max=_coerce_float(x_axis.get("max", DEFAULT_AXIS_MAX), "axis.x.max"),
        y_min=_coerce_float(y_axis.get("min", DEFAULT_AXIS_MIN), "axis.y.min"),
        y_max=_coerce_float(y_axis.get("max", DEFAULT_AXIS_MAX), "axis.y.max"),
        width=_coerce_int(raw.get("width", DEFAULT_WIDTH), "width"),
        height=_coerce_int(raw.get("height", DEFAULT_HEIGHT), "height"),
        margins=margins,
        allow_overflow=allow_overflow,
        sample_spacing_px=_coerce_float(
            raw.get("sample_spacing_px", DEFAULT_SAMPLE_SPACING_PX), "sample_spacing_px"
        ),
    )


def _coerce_table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a table")
    return value


def _coerce_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    return float(value)


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    return value
