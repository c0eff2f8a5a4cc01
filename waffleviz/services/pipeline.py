from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Dict, List, Optional, Protocol, Sequence, Tuple

import pandas as pd

from ..core.settings import Settings, get_settings
from ..schemas.waffle import ChartConfig
from .coercion import coerce_dates, coerce_numbers
from .colors import CategoryColorMap, reconcile, recolor
from .data_loader import DataLoader, FileDataLoader, to_frame
from .data_profile import domain_to_dict, normalize_value
from .renderer import MatplotlibWaffleRenderer
from .scale_domain import ScaleDomain, resolve
from .type_inference import DomainKind, classify, first_linear_column, first_ordinal_column
from .waffle_layout import WaffleGrid, layout

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, build: "WaffleBuild") -> bytes:
        ...


class LayoutStrategy(Protocol):
    name: str

    def layout(
        self,
        frame: pd.DataFrame,
        config: ChartConfig,
        value_column: str,
        category_column: str,
        categories: Sequence[Any],
    ) -> WaffleGrid:
        ...


class WaffleStrategy:
    """Square-grid layout; falls back to the configured default grid when no size is given."""

    name = "waffle"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def layout(
        self,
        frame: pd.DataFrame,
        config: ChartConfig,
        value_column: str,
        category_column: str,
        categories: Sequence[Any],
    ) -> WaffleGrid:
        num_columns = config.num_columns
        if num_columns is None and config.width is None:
            num_columns = self.settings.num_columns
        num_rows = config.num_rows
        if num_rows is None and config.height is None:
            num_rows = self.settings.num_rows
        return layout(
            config.width,
            config.height,
            config.square_size,
            config.gap,
            frame,
            value_column,
            category_column,
            square_value=config.square_value,
            num_columns=num_columns,
            num_rows=num_rows,
            categories=categories,
        )


@dataclass(frozen=True)
class LegendEntry:
    category: Any
    color: str
    squares: int
    total: float


@dataclass(frozen=True, eq=False)
class WaffleBuild:
    frame: pd.DataFrame
    config: ChartConfig
    value_column: str
    category_column: str
    domains: Dict[str, ScaleDomain]
    totals: Tuple[Tuple[Any, float], ...]
    grid: WaffleGrid
    colors: CategoryColorMap

    def legend(self) -> List[LegendEntry]:
        counts = self.grid.counts()
        totals = dict(self.totals)
        return [
            LegendEntry(
                category=category,
                color=color,
                squares=counts.get(category, 0),
                total=totals.get(category, 0.0),
            )
            for category, color in self.colors.entries
        ]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the grid, legend and domains."""
        grid = self.grid
        return {
            "value_column": self.value_column,
            "category_column": self.category_column,
            "grid": {
                "columns": grid.columns,
                "rows": grid.rows,
                "square_size": grid.square_size,
                "gap": grid.gap,
                "square_value": grid.square_value,
                "width": grid.width,
                "height": grid.height,
                "squares": [
                    {
                        "index": square.index,
                        "row": square.row,
                        "column": square.column,
                        "x": square.x,
                        "y": square.y,
                        "category": normalize_value(square.category),
                        "value": square.value,
                    }
                    for square in grid.squares
                ],
            },
            "legend": [
                {
                    "category": normalize_value(entry.category),
                    "color": entry.color,
                    "squares": entry.squares,
                    "total": entry.total,
                }
                for entry in self.legend()
            ],
            "domains": {str(name): domain_to_dict(domain) for name, domain in self.domains.items()},
        }


class ChartPipeline:
    """Dataset to waffle build: infer, coerce, resolve domains, color, lay out."""

    def __init__(
        self,
        loader: Optional[DataLoader] = None,
        renderer: Optional[Renderer] = None,
        strategy: Optional[LayoutStrategy] = None,
    ) -> None:
        self.loader = loader or FileDataLoader()
        self.renderer = renderer or MatplotlibWaffleRenderer()
        self.strategy = strategy or WaffleStrategy()

    def build(self, data: Any, config: Optional[ChartConfig] = None) -> WaffleBuild:
        return self._build(to_frame(data), config or ChartConfig(), previous=None)

    def build_from(self, location: str, config: Optional[ChartConfig] = None) -> Awaitable[WaffleBuild]:
        """Load a dataset and build it. Unsupported locations fail before anything is awaited."""

        pending = self.loader.load(location)
        return self._build_when_loaded(pending, config)

    async def _build_when_loaded(self, pending: Awaitable[pd.DataFrame], config: Optional[ChartConfig]) -> WaffleBuild:
        frame = await pending
        return self.build(frame, config)

    def relayout(self, previous: WaffleBuild, config: ChartConfig) -> WaffleBuild:
        """Rebuild after a geometry or option change, keeping the color domain order."""

        return self._build(previous.frame, config, previous=previous.colors)

    def recolor(self, previous: WaffleBuild, colors: Sequence[str]) -> WaffleBuild:
        return replace(
            previous,
            config=previous.config.with_colors(list(colors)),
            colors=recolor(previous.colors, colors),
        )

    def render(self, build: WaffleBuild) -> bytes:
        return self.renderer.render(build)

    def _select_columns(self, frame: pd.DataFrame, config: ChartConfig) -> Tuple[str, str]:
        value_column = config.value_column or first_linear_column(frame)
        category_column = config.category_column or first_ordinal_column(frame)
        if value_column is None:
            raise ValueError("No numeric column found for waffle values; set value_column")
        if category_column is None:
            raise ValueError("No categorical column found for waffle categories; set category_column")
        for column in (value_column, category_column):
            if column not in frame.columns:
                raise KeyError(f"Column '{column}' not found in dataset")
        if value_column == category_column:
            raise ValueError(f"Column '{value_column}' cannot be both the value and the category column")
        return value_column, category_column

    def _build(self, frame: pd.DataFrame, config: ChartConfig, previous: Optional[CategoryColorMap]) -> WaffleBuild:
        if frame.empty:
            raise ValueError("Dataset has no records")
        value_column, category_column = self._select_columns(frame, config)

        if classify(frame, category_column, config.time_format) == DomainKind.temporal:
            frame = coerce_dates(frame, category_column, config.time_format)
        frame = coerce_numbers(frame, value_column)

        seen = resolve(frame, category_column, DomainKind.ordinal)
        colors = reconcile(previous, seen.values)
        if config.colors and tuple(config.colors) != colors.palette:
            colors = recolor(colors, config.colors)
        domains = {
            category_column: ScaleDomain(kind=DomainKind.ordinal, values=colors.domain),
            value_column: resolve(frame, value_column, DomainKind.linear),
        }

        grid = self.strategy.layout(frame, config, value_column, category_column, colors.domain)
        sums = frame.groupby(category_column, sort=False)[value_column].sum()
        totals = tuple((category, float(sums.get(category, 0.0))) for category in colors.domain)
        logger.info(
            "Built %s chart: %d categories over %dx%d squares",
            self.strategy.name,
            len(colors),
            grid.columns,
            grid.rows,
        )
        return WaffleBuild(
            frame=frame,
            config=config,
            value_column=value_column,
            category_column=category_column,
            domains=domains,
            totals=totals,
            grid=grid,
            colors=colors,
        )
