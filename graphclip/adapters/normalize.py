from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
import math
from typing import Any, Hashable

import numpy as np

from graphclip.aggregate import SeriesPoint
from graphclip.errors import EmptyInputError, GraphClipError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


_RESERVED_KEYS = ("series", "x", "y", "weight")


def points_from_records(
    records: Sequence[Mapping[str, Any]],
    *,
    x_key: str,
    y_key: str,
    series_key: str | None = None,
    extra_keys: Sequence[str] = (),
) -> list[SeriesPoint]:
    if not records:
        raise EmptyInputError("no records")
    points: list[SeriesPoint] = []
    for index, record in enumerate(records):
        raw_x = record.get(x_key)
        raw_y = record.get(y_key)
        if raw_x is None or raw_y is None:
            continue
        series: Hashable = index
        if series_key is not None and record.get(series_key):
            series = record[series_key]
        extra: dict[str, Any] = {}
        for key in extra_keys:
            extra[_free_key(key, extra)] = record.get(key)
        points.append(
            SeriesPoint(
                series=series,
                x=_parse_float(raw_x),
                y=_zero_if_nan(_parse_float(raw_y)),
                extra=extra,
            )
        )
    return points


def points_from_pairs(pairs: Sequence[Sequence[Any]], series: Hashable) -> list[SeriesPoint]:
    if not pairs:
        raise EmptyInputError("no coordinate pairs")
    points: list[SeriesPoint] = []
    for pair in pairs:
        if len(pair) < 2 or pair[0] is None or pair[1] is None:
            continue
        points.append(
            SeriesPoint(series=series, x=_parse_float(pair[0]), y=_zero_if_nan(_parse_float(pair[1])))
        )
    return points


def points_from_arrays(x: Any, y: Any, series: Hashable) -> list[SeriesPoint]:
    x_arr = _coerce_1d_numeric(x, label="x")
    y_arr = _coerce_1d_numeric(y, label="y")
    if x_arr.size == 0:
        raise EmptyInputError("empty series")
    if x_arr.shape != y_arr.shape:
        raise GraphClipError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    mask = np.isfinite(x_arr)
    y_arr = np.where(np.isnan(y_arr), 0.0, y_arr)
    return [
        SeriesPoint(series=series, x=float(xv), y=float(yv))
        for xv, yv in zip(x_arr[mask].tolist(), y_arr[mask].tolist(), strict=True)
    ]


def points_from_frame(frame: Any, *, x_col: str, y_col: str, series_col: str | None = None) -> list[SeriesPoint]:
    if pd is None:
        raise GraphClipError("pandas is required for DataFrame input")
    if not isinstance(frame, pd.DataFrame):
        raise GraphClipError("frame must be a pandas DataFrame")
    for col in (x_col, y_col, series_col):
        if col is not None and col not in frame.columns:
            raise GraphClipError(f"column not found: {col}")
    if frame.empty:
        raise EmptyInputError("empty DataFrame")
    columns = [x_col, y_col] + ([series_col] if series_col is not None else [])
    records = frame[columns].to_dict(orient="records")
    for record in records:
        for col in (x_col, y_col):
            value = record[col]
            if isinstance(value, float) and math.isnan(value):
                record[col] = None
    return points_from_records(records, x_key=x_col, y_key=y_col, series_key=series_col)


def _free_key(key: str, taken: Mapping[str, Any]) -> str:
    candidate = key
    suffix = 2
    while candidate in _RESERVED_KEYS or candidate in taken:
        candidate = f"{key}{suffix}"
        suffix += 1
    return candidate


def _parse_float(value: Any) -> float:
    if isinstance(value, Decimal):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _zero_if_nan(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        arr = value.detach().cpu().to(torch.float64).numpy()
    elif pd is not None and isinstance(value, pd.Series):
        arr = value.to_numpy()
    elif isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise GraphClipError(f"unsupported {label} input type: {type(value)!r}")
    if arr.ndim != 1:
        raise GraphClipError(f"{label} must be 1-D")
    return _coerce_ndarray(arr)


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        out[i] = np.nan if raw is None else _parse_float(raw)
    return out
