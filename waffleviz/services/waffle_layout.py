from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .coercion import coerce_numbers
from .errors import DegenerateLayoutError
from .scale_domain import resolve
from .type_inference import DomainKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Square:
    index: int
    row: int
    column: int
    x: float
    y: float
    category: Any
    value: float


@dataclass(frozen=True)
class WaffleGrid:
    columns: int
    rows: int
    square_size: float
    gap: float
    square_value: float
    width: float
    height: float
    allocation: Tuple[Tuple[Any, int], ...]
    squares: Tuple[Square, ...]

    @property
    def total_squares(self) -> int:
        return self.columns * self.rows

    @property
    def categories(self) -> Tuple[Any, ...]:
        return tuple(category for category, _ in self.allocation)

    @property
    def cell_size(self) -> float:
        """Drawn side of a square once the gap is taken out."""
        return max(self.square_size - self.gap, 0.0)

    def counts(self) -> Dict[Any, int]:
        return dict(self.allocation)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _fit(container: Optional[float], square_size: float, axis: str) -> int:
    if container is None:
        raise ValueError(f"Either a container {axis} or an explicit square count is required")
    return int(math.floor(container / square_size))


def _category_totals(
    frame: pd.DataFrame,
    value_column: str,
    category_column: str,
    categories: Optional[Sequence[Any]],
) -> List[Tuple[Any, float]]:
    seen = resolve(frame, category_column, DomainKind.ordinal).values
    if categories is None:
        order = list(seen)
    else:
        order = list(dict.fromkeys(categories))
        order.extend(category for category in seen if category not in order)
    sums = frame.groupby(category_column, sort=False)[value_column].sum()
    return [(category, float(sums.get(category, 0.0))) for category in order]


def _resolve_square_value(square_value: Optional[float], total_value: float, total_squares: int) -> float:
    if not math.isfinite(total_value) or total_value <= 0:
        raise DegenerateLayoutError(f"Total value {total_value} cannot be spread over {total_squares} squares")
    unit = float(square_value) if square_value is not None else total_value / total_squares
    if not math.isfinite(unit) or unit <= 0:
        raise DegenerateLayoutError(f"Square value must be positive, got {unit}")
    return unit


def allocate(totals: Sequence[Tuple[Any, float]], square_value: float, total_squares: int) -> List[Tuple[Any, int]]:
    """Share ``total_squares`` between categories in order.

    Each category gets its rounded share, capped by what is left; the last one
    takes the remainder so the counts always add up to ``total_squares``.
    """

    if not totals:
        raise DegenerateLayoutError("No categories to allocate squares to")
    allocation: List[Tuple[Any, int]] = []
    remaining = total_squares
    last = len(totals) - 1
    for idx, (category, total) in enumerate(totals):
        if idx == last:
            count = remaining
        else:
            count = min(max(_round_half_up(total / square_value), 0), remaining)
        remaining -= count
        allocation.append((category, count))
    return allocation


def layout(
    container_width: Optional[float],
    container_height: Optional[float],
    square_size: float,
    gap: float,
    dataset: Any,
    value_column: str,
    category_column: str,
    square_value: Optional[float] = None,
    num_columns: Optional[int] = None,
    num_rows: Optional[int] = None,
    categories: Optional[Sequence[Any]] = None,
) -> WaffleGrid:
    """Compute the waffle grid for a dataset.

    Explicit ``num_columns``/``num_rows`` win over the container size. Passing
    ``categories`` fixes the allocation order, which keeps a previously
    established color domain order across relayouts.
    """

    if square_size <= 0:
        raise DegenerateLayoutError(f"Square size must be positive, got {square_size}")
    if gap < 0:
        raise ValueError(f"Gap must not be negative, got {gap}")

    columns = num_columns if num_columns is not None else _fit(container_width, square_size, "width")
    rows = num_rows if num_rows is not None else _fit(container_height, square_size, "height")
    if columns <= 0 or rows <= 0:
        raise DegenerateLayoutError(f"Grid of {columns}x{rows} squares has no cells")
    total_squares = columns * rows

    frame = coerce_numbers(dataset, value_column)
    total_value = float(frame[value_column].sum())
    unit = _resolve_square_value(square_value, total_value, total_squares)
    totals = _category_totals(frame, value_column, category_column, categories)
    allocation = allocate(totals, unit, total_squares)

    squares: List[Square] = []
    for category, count in allocation:
        for _ in range(count):
            index = len(squares)
            row, column = divmod(index, columns)
            squares.append(
                Square(
                    index=index,
                    row=row,
                    column=column,
                    x=column * square_size,
                    y=row * square_size,
                    category=category,
                    value=unit,
                )
            )

    logger.debug(
        "Waffle layout %dx%d, square value %.4g, allocation %s",
        columns,
        rows,
        unit,
        allocation,
    )
    return WaffleGrid(
        columns=columns,
        rows=rows,
        square_size=square_size,
        gap=gap,
        square_value=unit,
        width=columns * square_size,
        height=rows * square_size,
        allocation=tuple(allocation),
        squares=tuple(squares),
    )
