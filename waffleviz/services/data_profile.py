from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .data_loader import to_frame
from .errors import DateCoercionError
from .scale_domain import ScaleDomain, resolve
from .type_inference import (
    DomainKind,
    classify,
    first_linear_column,
    first_ordinal_column,
    first_time_column,
)


def normalize_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (pd.Timestamp, pd.Timedelta)):
        return value.isoformat()
    if isinstance(value, (np.integer, np.floating, np.bool_)):
        value = value.item()
    if isinstance(value, float) and not np.isfinite(value):
        return None
    if pd.isna(value):  # type: ignore[arg-type]
        return None
    return value


def domain_to_dict(domain: ScaleDomain) -> Dict[str, Any]:
    return {"kind": domain.kind.value, "values": [normalize_value(value) for value in domain.values]}


@dataclass
class ColumnProfile:
    name: str
    kind: DomainKind
    distinct: int
    sample_values: List[Any]
    domain: Optional[ScaleDomain]


class DataProfiler:
    """Produce JSON-friendly column profiles: inferred kind, samples and scale domain."""

    def __init__(self, sample_values: int = 5) -> None:
        self.sample_values = sample_values

    def build_profile(self, dataset: Any, time_format: Optional[str] = None) -> Dict[str, Any]:
        frame = to_frame(dataset)
        columns = [self._summarize_column(frame, name, time_format) for name in frame.columns]
        return {
            "row_count": int(len(frame)),
            "column_count": int(len(frame.columns)),
            "columns": [self._column_to_dict(col) for col in columns],
            "first_ordinal_column": first_ordinal_column(frame),
            "first_linear_column": first_linear_column(frame),
            "first_time_column": first_time_column(frame, time_format),
        }

    def _summarize_column(self, frame: pd.DataFrame, name: str, time_format: Optional[str]) -> ColumnProfile:
        series = frame[name]
        kind = classify(frame, name, time_format)
        domain: Optional[ScaleDomain] = None
        try:
            domain = resolve(frame, name, kind, time_format)
        except (DateCoercionError, ValueError):
            # Sampled as temporal or linear but the full column disagrees.
            domain = None
        return ColumnProfile(
            name=str(name),
            kind=kind,
            distinct=int(series.nunique(dropna=True)),
            sample_values=[normalize_value(val) for val in series.dropna().head(self.sample_values).tolist()],
            domain=domain,
        )

    def _column_to_dict(self, col: ColumnProfile) -> Dict[str, Any]:
        return {
            "name": col.name,
            "kind": col.kind.value,
            "distinct": col.distinct,
            "sample_values": col.sample_values,
            "domain": domain_to_dict(col.domain) if col.domain is not None else None,
        }
