import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from matplotlib.colors import to_hex

load_dotenv()

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from waffleviz.core.settings import get_settings
from waffleviz.schemas.waffle import ChartConfig
from waffleviz.services import ChartPipeline, WaffleBuild, WaffleVizError
from waffleviz.utils.audit import AuditLogger

console = Console(soft_wrap=False)

SQUARE = "■"


def _trim(text: str, limit: int = 70) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[: limit - 1]}..."


def _build_config(args: argparse.Namespace) -> ChartConfig:
    config = ChartConfig()
    if args.width:
        config = config.with_width(args.width)
    if args.height:
        config = config.with_height(args.height)
    if args.columns:
        config = config.with_columns(args.columns)
    if args.rows:
        config = config.with_rows(args.rows)
    if args.square_size:
        config = config.with_square_size(args.square_size)
    if args.gap is not None:
        config = config.with_gap(args.gap)
    if args.square_value:
        config = config.with_square_value(args.square_value)
    if args.colors:
        config = config.with_colors(args.colors)
    if args.value_column:
        config = config.with_value_column(args.value_column)
    if args.category_column:
        config = config.with_category_column(args.category_column)
    if args.time_format:
        config = config.with_time_format(args.time_format)
    return config


def _grid_text(build: WaffleBuild) -> Text:
    grid = build.grid
    text = Text()
    for square in grid.squares:
        if square.column == 0 and square.index:
            text.append("\n")
        text.append(SQUARE + " ", style=to_hex(build.colors.color_for(square.category)))
    return text


def _legend_table(build: WaffleBuild) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", no_wrap=True)
    table.add_column(build.category_column, style="white", overflow="fold")
    table.add_column("squares", justify="right", style="yellow")
    table.add_column(build.value_column, justify="right", style="magenta")
    for entry in build.legend():
        table.add_row(Text(SQUARE, style=to_hex(entry.color)), str(entry.category), str(entry.squares), f"{entry.total:,.2f}")
    return table


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out a waffle chart for a csv, tsv or json dataset.")
    parser.add_argument("location", help="Path or URL of a .csv, .tsv or .json file")
    parser.add_argument("--value-column", default=None)
    parser.add_argument("--category-column", default=None)
    parser.add_argument("--width", type=float, default=None)
    parser.add_argument("--height", type=float, default=None)
    parser.add_argument("--columns", type=int, default=None)
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--square-size", type=float, default=None)
    parser.add_argument("--gap", type=float, default=None)
    parser.add_argument("--square-value", type=float, default=None)
    parser.add_argument("--colors", nargs="+", default=None)
    parser.add_argument("--time-format", default=None)
    parser.add_argument("--save", action="store_true", help="Write grid, legend and PNG under the storage root")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    pipeline = ChartPipeline()
    try:
        config = _build_config(args)
        build = asyncio.run(pipeline.build_from(args.location, config))
    except (WaffleVizError, KeyError, ValueError) as exc:
        console.print(Panel(Text(_trim(str(exc), 400)), title="error", border_style="red"))
        raise SystemExit(1) from exc

    grid = build.grid
    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="cyan", justify="right", no_wrap=True)
    summary.add_column(style="bold white")
    summary.add_row("grid", f"{grid.columns} x {grid.rows}")
    summary.add_row("square value", f"{grid.square_value:,.4g}")
    summary.add_row("size", f"{grid.width:g} x {grid.height:g} px")
    console.print(Panel(summary, title=_trim(args.location, 60), border_style="green"))
    console.print(Panel(_grid_text(build), title="waffle", border_style="grey50", expand=False))
    console.print(_legend_table(build))

    if args.save:
        payload: Dict[str, Any] = build.to_dict()
        run_inputs = {"location": args.location, "config": build.config.model_dump()}
        audit_path = AuditLogger(get_settings().storage_root).persist(run_inputs, payload, pipeline.render(build))
        console.print(f"[green]saved[/] {audit_path}")


if __name__ == "__main__":
    main()
