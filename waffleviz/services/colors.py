from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from matplotlib import colormaps
from matplotlib.colors import is_color_like, to_hex

# Same ten colors as d3's category10.
DEFAULT_PALETTE: Tuple[str, ...] = tuple(to_hex(rgb) for rgb in colormaps["tab10"].colors)


@dataclass(frozen=True)
class CategoryColorMap:
    """Ordered category to color assignment. Key order is the category domain order."""

    entries: Tuple[Tuple[Any, str], ...]
    palette: Tuple[str, ...] = DEFAULT_PALETTE

    @property
    def domain(self) -> Tuple[Any, ...]:
        return tuple(category for category, _ in self.entries)

    @property
    def range(self) -> Tuple[str, ...]:
        return tuple(color for _, color in self.entries)

    def color_for(self, category: Any) -> str:
        for key, color in self.entries:
            if key == category:
                return color
        raise KeyError(category)

    def to_dict(self) -> Dict[Any, str]:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.domain)


def _validated_colors(colors: Iterable[Any]) -> Tuple[str, ...]:
    values = tuple(colors)
    if not values:
        raise ValueError("At least one color is required")
    for color in values:
        if not is_color_like(color):
            raise ValueError(f"'{color}' is not a valid color")
    return tuple(str(color) for color in values)


def _assign(domain: Sequence[Any], colors: Tuple[str, ...]) -> Tuple[Tuple[Any, str], ...]:
    return tuple((category, colors[idx % len(colors)]) for idx, category in enumerate(domain))


def initialize(domain: Iterable[Any], palette: Optional[Sequence[Any]] = None) -> CategoryColorMap:
    """Assign palette colors to categories in domain order, cycling when needed."""

    colors = _validated_colors(palette if palette is not None else DEFAULT_PALETTE)
    categories = list(dict.fromkeys(domain))
    return CategoryColorMap(entries=_assign(categories, colors), palette=colors)


def recolor(existing: CategoryColorMap, new_colors: Sequence[Any]) -> CategoryColorMap:
    """Swap in new colors while keeping the existing category order."""

    colors = _validated_colors(new_colors)
    return CategoryColorMap(entries=_assign(existing.domain, colors), palette=colors)


def reconcile(existing: Optional[CategoryColorMap], domain: Iterable[Any]) -> CategoryColorMap:
    """Keep an existing map when its category set is unchanged, otherwise rebuild it."""

    categories = list(dict.fromkeys(domain))
    if existing is None:
        return initialize(categories)
    if set(existing.domain) == set(categories):
        return existing
    return initialize(categories, existing.palette)
