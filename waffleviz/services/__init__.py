from .coercion import coerce_dates, coerce_numbers
from .colors import DEFAULT_PALETTE, CategoryColorMap, initialize, reconcile, recolor
from .data_loader import FileDataLoader, get_data_type, to_frame
from .data_profile import DataProfiler
from .errors import (
    DateCoercionError,
    DegenerateLayoutError,
    LoadError,
    UnsupportedSourceError,
    WaffleVizError,
)
from .pipeline import ChartPipeline, LegendEntry, WaffleBuild, WaffleStrategy
from .renderer import MatplotlibWaffleRenderer
from .scale_domain import ScaleDomain, resolve
from .type_inference import (
    DomainKind,
    classify,
    first_linear_column,
    first_ordinal_column,
    first_time_column,
)
from .waffle_layout import Square, WaffleGrid, layout

__all__ = [
    "coerce_dates",
    "coerce_numbers",
    "DEFAULT_PALETTE",
    "CategoryColorMap",
    "initialize",
    "reconcile",
    "recolor",
    "FileDataLoader",
    "get_data_type",
    "to_frame",
    "DataProfiler",
    "DateCoercionError",
    "DegenerateLayoutError",
    "LoadError",
    "UnsupportedSourceError",
    "WaffleVizError",
    "ChartPipeline",
    "LegendEntry",
    "WaffleBuild",
    "WaffleStrategy",
    "MatplotlibWaffleRenderer",
    "ScaleDomain",
    "resolve",
    "DomainKind",
    "classify",
    "first_linear_column",
    "first_ordinal_column",
    "first_time_column",
    "Square",
    "WaffleGrid",
    "layout",
]
