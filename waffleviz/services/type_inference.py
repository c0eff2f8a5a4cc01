from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from .data_loader import to_frame

logger = logging.getLogger(__name__)

_DATE_SEPARATORS = (" ", "/", "-")

# Numeric text as JavaScript's Number() reads it: no digit separators, no
# "inf"/"nan" spellings, and unsigned 0x/0o/0b literals.
_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)$")
_RADIX_LITERAL = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
_RADIXES = {"x": 16, "o": 8, "b": 2}


class DomainKind(str, Enum):
    ordinal = "ordinal"
    linear = "linear"
    temporal = "temporal"
    unknown = "unknown"


def to_number(value: Any) -> float:
    """Permissive numeric conversion: blanks and None are 0, unparseable text is NaN."""

    if value is None:
        return 0.0
    if value is pd.NaT:
        return math.nan
    if isinstance(value, (bool, np.bool_)):
        return float(value)
    if isinstance(value, (datetime, date, np.datetime64)):
        return float(pd.Timestamp(value).value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    match = _RADIX_LITERAL.match(text)
    if match:
        try:
            return float(int(match.group(2), _RADIXES[match.group(1).lower()]))
        except ValueError:
            return math.nan
    if _DECIMAL_LITERAL.match(text):
        return float(text)
    return math.nan


def is_numeric_like(value: Any) -> bool:
    number = to_number(value)
    return not math.isnan(number) and number != 0


def is_acceptable_time_format(value: Any, time_format: Optional[str] = None) -> bool:
    """Return True when a single value reads as a date.

    With a format the value's string form must match it, numbers included.
    Without one, numbers never qualify and text needs a date-like separator
    and must survive a generic parse.
    """

    if value is None or value is pd.NaT:
        return False
    if isinstance(value, (datetime, date, np.datetime64)):
        return True
    text = str(value)
    if not time_format:
        if isinstance(value, (bool, int, float, np.number, np.bool_)):
            return False
        if not any(sep in text for sep in _DATE_SEPARATORS):
            return False
    try:
        if time_format:
            parsed = pd.to_datetime(text, format=time_format, errors="coerce")
        else:
            parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return False
    return not pd.isna(parsed)


def _sample(frame: pd.DataFrame, column: str) -> Any:
    # Inference inspects only the first record; later rows are not validated.
    return frame[column].iloc[0]


def _has_column(frame: pd.DataFrame, column: str) -> bool:
    return not frame.empty and column in frame.columns


def column_names(dataset: Any) -> List[str]:
    return [str(name) for name in to_frame(dataset).columns]


def is_ordinal(dataset: Any, column: str) -> bool:
    frame = to_frame(dataset)
    if not _has_column(frame, column):
        return False
    return not is_numeric_like(_sample(frame, column))


def is_time(dataset: Any, column: str, time_format: Optional[str] = None) -> bool:
    frame = to_frame(dataset)
    if not _has_column(frame, column):
        return False
    return is_acceptable_time_format(_sample(frame, column), time_format)


def is_linear(dataset: Any, column: str) -> bool:
    frame = to_frame(dataset)
    if not _has_column(frame, column):
        return False
    return not is_ordinal(frame, column) and not is_time(frame, column)


def classify(dataset: Any, column: str, time_format: Optional[str] = None) -> DomainKind:
    frame = to_frame(dataset)
    if not _has_column(frame, column):
        kind = DomainKind.unknown
    elif is_time(frame, column, time_format):
        kind = DomainKind.temporal
    elif is_ordinal(frame, column):
        kind = DomainKind.ordinal
    else:
        kind = DomainKind.linear
    logger.debug("Column %r classified as %s", column, kind.value)
    return kind


def first_ordinal_column(dataset: Any) -> Optional[str]:
    frame = to_frame(dataset)
    for name in frame.columns:
        if is_ordinal(frame, name):
            return name
    return None


def first_linear_column(dataset: Any) -> Optional[str]:
    frame = to_frame(dataset)
    for name in frame.columns:
        if is_linear(frame, name):
            return name
    return None


def first_time_column(dataset: Any, time_format: Optional[str] = None) -> Optional[str]:
    frame = to_frame(dataset)
    for name in frame.columns:
        if is_time(frame, name, time_format):
            return name
    return None
