from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from matplotlib.colors import is_color_like
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    PositiveFloat,
    PositiveInt,
    field_validator,
)

from ..core.settings import get_settings


class ChartConfig(BaseModel):
    """Immutable chart options. Each ``with_*`` call returns a new validated config."""

    model_config = ConfigDict(frozen=True)

    num_columns: Optional[PositiveInt] = None
    num_rows: Optional[PositiveInt] = None
    width: Optional[PositiveFloat] = None
    height: Optional[PositiveFloat] = None
    square_size: PositiveFloat = Field(default_factory=lambda: get_settings().square_size)
    gap: NonNegativeFloat = Field(default_factory=lambda: get_settings().gap)
    square_value: Optional[PositiveFloat] = None
    colors: Optional[List[str]] = None
    value_column: Optional[str] = None
    category_column: Optional[str] = None
    time_format: Optional[str] = None

    @field_validator("colors")
    @classmethod
    def _check_colors(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        if not value:
            raise ValueError("colors must not be empty")
        for color in value:
            if not is_color_like(color):
                raise ValueError(f"'{color}' is not a valid color")
        return value

    def _with(self, **changes: Any) -> "ChartConfig":
        return type(self).model_validate({**self.model_dump(), **changes})

    def with_columns(self, num_columns: int) -> "ChartConfig":
        return self._with(num_columns=num_columns)

    def with_rows(self, num_rows: int) -> "ChartConfig":
        return self._with(num_rows=num_rows)

    def with_width(self, width: float) -> "ChartConfig":
        # Column count is then derived from width / square_size.
        return self._with(width=width, num_columns=None)

    def with_height(self, height: float) -> "ChartConfig":
        return self._with(height=height, num_rows=None)

    def with_square_size(self, square_size: float) -> "ChartConfig":
        return self._with(square_size=square_size)

    def with_gap(self, gap: float) -> "ChartConfig":
        return self._with(gap=gap)

    def with_square_value(self, square_value: Optional[float]) -> "ChartConfig":
        return self._with(square_value=square_value)

    def with_colors(self, colors: List[str]) -> "ChartConfig":
        return self._with(colors=list(colors))

    def with_value_column(self, column: str) -> "ChartConfig":
        return self._with(value_column=column)

    def with_category_column(self, column: str) -> "ChartConfig":
        return self._with(category_column=column)

    def with_time_format(self, time_format: Optional[str]) -> "ChartConfig":
        return self._with(time_format=time_format)


Records = Union[List[Dict[str, Any]], Dict[str, Any]]


class ProfileRequest(BaseModel):
    data: Records
    time_format: Optional[str] = None


class WaffleRequest(BaseModel):
    data: Records
    config: ChartConfig = Field(default_factory=ChartConfig)
    include_png: bool = False


class DomainModel(BaseModel):
    kind: str
    values: List[Any]


class ColumnProfileModel(BaseModel):
    name: str
    kind: str
    distinct: int
    sample_values: List[Any]
    domain: Optional[DomainModel] = None


class ProfileResponse(BaseModel):
    row_count: int
    column_count: int
    columns: List[ColumnProfileModel]
    first_ordinal_column: Optional[str] = None
    first_linear_column: Optional[str] = None
    first_time_column: Optional[str] = None


class SquareModel(BaseModel):
    index: int
    row: int
    column: int
    x: float
    y: float
    category: Any
    value: float


class WaffleGridModel(BaseModel):
    columns: int
    rows: int
    square_size: float
    gap: float
    square_value: float
    width: float
    height: float
    squares: List[SquareModel]


class LegendEntryModel(BaseModel):
    category: Any
    color: str
    squares: int
    total: float


class WaffleResponse(BaseModel):
    value_column: str
    category_column: str
    grid: WaffleGridModel
    legend: List[LegendEntryModel]
    domains: Dict[str, DomainModel]
    png_base64: Optional[str] = Field(None, description="Rendered chart when include_png is set.")
