from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd

from .data_loader import to_frame
from .errors import DateCoercionError
from .type_inference import to_number

logger = logging.getLogger(__name__)


def _require_column(frame: pd.DataFrame, column: str) -> None:
    if column not in frame.columns:
        raise KeyError(f"Column '{column}' not found in dataset")


def coerce_numbers(dataset: Any, column: str) -> pd.DataFrame:
    """Return a copy of the dataset with ``column`` converted to floats.

    Values that do not read as numbers become NaN rather than failing.
    """

    frame = to_frame(dataset)
    _require_column(frame, column)
    result = frame.copy()
    series = frame[column]
    if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
        result[column] = series.astype(float)
    else:
        result[column] = series.map(to_number).astype(float)
    return result


def _parse_dates(series: pd.Series, time_format: Optional[str]) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(series):
        return series
    text = series.map(lambda value: value if value is None else str(value))
    try:
        if time_format:
            return pd.to_datetime(text, format=time_format, errors="coerce")
        return pd.to_datetime(text, format="mixed", errors="coerce")
    except (ValueError, TypeError, OverflowError):
        # Mixed time zones and similar cannot be batch parsed; fall back per value.
        return text.map(lambda value: _parse_one(value, time_format))


def _parse_one(value: Any, time_format: Optional[str]) -> Any:
    try:
        return pd.to_datetime(value, format=time_format, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return pd.NaT


def coerce_dates(dataset: Any, column: str, time_format: Optional[str] = None) -> pd.DataFrame:
    """Return a copy of the dataset with ``column`` parsed into timestamps.

    Raises DateCoercionError on the first value that does not parse; the input
    dataset is left untouched either way.
    """

    frame = to_frame(dataset)
    _require_column(frame, column)
    original = frame[column]
    parsed = _parse_dates(original, time_format)
    failed = parsed.isna()
    if failed.any():
        position = int(failed.to_numpy().nonzero()[0][0])
        bad_value = original.iloc[position]
        logger.debug("Date coercion of %r failed at row %d", column, position)
        raise DateCoercionError(column, bad_value, time_format)
    result = frame.copy()
    result[column] = parsed
    return result
