from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import pandas as pd

from .coercion import coerce_dates, coerce_numbers
from .data_loader import to_frame
from .type_inference import DomainKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleDomain:
    kind: DomainKind
    values: Tuple[Any, ...]

    @property
    def is_ordinal(self) -> bool:
        return self.kind == DomainKind.ordinal

    @property
    def extent(self) -> Tuple[Any, Any]:
        if self.is_ordinal:
            raise ValueError("Ordinal domains have no extent")
        return self.values[0], self.values[1]


def _ordinal_domain(series: pd.Series) -> Tuple[Any, ...]:
    # drop_duplicates keeps first-seen order; tolist boxes datetimes as Timestamps.
    return tuple(series.dropna().drop_duplicates().tolist())


def _extent(series: pd.Series, column: str) -> Tuple[Any, Any]:
    present = series.dropna()
    if present.empty:
        raise ValueError(f"Column '{column}' has no values to derive a domain from")
    return present.min(), present.max()


def resolve(dataset: Any, column: str, kind: DomainKind, time_format: Optional[str] = None) -> ScaleDomain:
    """Compute the scale domain for one column of the dataset."""

    kind = DomainKind(kind)
    frame = to_frame(dataset)
    if kind == DomainKind.ordinal:
        if column not in frame.columns:
            raise KeyError(f"Column '{column}' not found in dataset")
        values = _ordinal_domain(frame[column])
    elif kind == DomainKind.linear:
        low, high = _extent(coerce_numbers(frame, column)[column], column)
        values = (float(low), float(high))
    elif kind == DomainKind.temporal:
        low, high = _extent(coerce_dates(frame, column, time_format)[column], column)
        values = (pd.Timestamp(low), pd.Timestamp(high))
    else:
        raise ValueError(f"Cannot resolve a scale domain for column '{column}' of kind '{kind}'")
    logger.debug("Resolved %s domain for %r: %s", kind.value, column, values)
    return ScaleDomain(kind=kind, values=values)
