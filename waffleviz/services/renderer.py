from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING

import matplotlib
matplotlib.use("Agg")  # Safe backend for headless environments
import matplotlib.pyplot as plt
from matplotlib.patches import Patch, Rectangle

if TYPE_CHECKING:
    from .pipeline import WaffleBuild


class MatplotlibWaffleRenderer:
    """Draw a waffle build as a PNG image."""

    def __init__(self, dpi: int = 100, legend: bool = True) -> None:
        self.dpi = dpi
        self.legend = legend

    def render(self, build: "WaffleBuild") -> bytes:
        grid = build.grid
        size = (max(grid.width / self.dpi, 1.0), max(grid.height / self.dpi, 1.0))
        fig, ax = plt.subplots(figsize=size, dpi=self.dpi)
        try:
            for square in grid.squares:
                ax.add_patch(
                    Rectangle(
                        (square.x, square.y),
                        grid.cell_size,
                        grid.cell_size,
                        facecolor=build.colors.color_for(square.category),
                        edgecolor="none",
                    )
                )
            ax.set_xlim(0, grid.width)
            # First row at the top.
            ax.set_ylim(grid.height, 0)
            ax.set_aspect("equal")
            ax.axis("off")
            if self.legend:
                handles = [Patch(facecolor=entry.color, label=str(entry.category)) for entry in build.legend()]
                ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.0, 1.0), frameon=False)
            buffer = BytesIO()
            fig.savefig(buffer, format="png", bbox_inches="tight")
        finally:
            plt.close(fig)
        return buffer.getvalue()
