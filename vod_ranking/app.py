"""Typer CLI entrypoint for the VOD ranking job."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional, Sequence

import typer
import yaml
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigRepository, RankingConfig, apply_overrides
from .engine import FetchError, ScoredMovie
from .logging_conf import configure_logging
from .orchestrator import Orchestrator

app = typer.Typer(
    help="Top rated titles across the leading VOD providers.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", help="YAML or JSON configuration file.", show_default=False),
]


@dataclass
class AppState:
    repository: ConfigRepository
    verbose: bool = False


def build_state(verbose: bool, log_dir: Optional[Path] = None) -> AppState:
    configure_logging(verbose=verbose, log_dir=log_dir)
    return AppState(repository=ConfigRepository(), verbose=verbose)


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _load_config(state: AppState, path: Optional[Path], **overrides: object) -> RankingConfig:
    try:
        return apply_overrides(state.repository.load(path), **overrides)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        console.print(f"Invalid configuration: {exc}", style="red", markup=False)
        raise typer.Exit(code=1) from exc


def _render_movies_table(movies: Sequence[ScoredMovie], year: str) -> Table:
    table = Table(title=f"Top rated titles {year}", box=box.SIMPLE_HEAD)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("VOD name", style="magenta")
    table.add_column("Rating", justify="right", style="green")
    for index, movie in enumerate(movies, start=1):
        table.add_row(
            str(index), escape(movie.title), escape(movie.provider_name), escape(movie.rating_text)
        )
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Also write JSON logs to this directory.", show_default=False),
    ] = None,
) -> None:
    ctx.obj = build_state(verbose, log_dir=log_dir)


@app.command("run", help="Fetch the rankings, reconcile them and write the CSV.")
def run(
    ctx: typer.Context,
    config: ConfigOption = None,
    year: Annotated[
        Optional[str], typer.Option("--year", help="Ranking year (defaults to the current year).")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", help="CSV output path.", show_default=False)
    ] = None,
    providers: Annotated[
        Optional[int], typer.Option("--providers", help="Number of providers to take.")
    ] = None,
    titles: Annotated[
        Optional[int], typer.Option("--titles", help="Number of titles per provider.")
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit with status 1 when the CSV cannot be written.")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", help="Print a one-line summary only.")] = False,
) -> None:
    state = _get_state(ctx)
    ranking_config = _load_config(
        state,
        config,
        target_year=year,
        output_path=output,
        provider_limit=providers,
        title_limit=titles,
    )
    orchestrator = Orchestrator(ranking_config)
    try:
        summary = orchestrator.run_sync()
    except FetchError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1) from exc

    if quiet:
        console.print(
            f"{len(summary.movies)} titles from {len(summary.providers)} providers ({summary.year})"
        )
    else:
        console.print(_render_movies_table(summary.movies, summary.year))

    export = summary.export
    if export is not None and export.ok:
        console.print(f"Saved {export.rows} rows to {export.path}", style="green")
        return
    error = export.error if export is not None else "no exporter result"
    console.print(
        f"Could not write {ranking_config.output_path}: {error}", style="red", markup=False
    )
    if strict:
        raise typer.Exit(code=1)


@app.command("show-config", help="Print the effective configuration as YAML.")
def show_config(ctx: typer.Context, config: ConfigOption = None) -> None:
    state = _get_state(ctx)
    ranking_config = _load_config(state, config)
    console.print(
        yaml.safe_dump(ranking_config.model_dump(mode="json"), allow_unicode=True, sort_keys=False),
        markup=False,
        highlight=False,
    )


@app.command("init-config", help="Write the default configuration file.")
def init_config(
    ctx: typer.Context,
    config: ConfigOption = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file.")] = False,
) -> None:
    state = _get_state(ctx)
    target = config or state.repository.locator.config_path()
    if target.exists() and not force:
        console.print(
            f"Configuration already exists (use --force to overwrite): {target}", style="yellow"
        )
        raise typer.Exit(code=1)
    # The year is left out so it keeps following the calendar.
    path = state.repository.save(RankingConfig(), target, exclude={"target_year"})
    console.print(f"Configuration written to {path}", style="green")


__all__ = ["AppState", "app", "build_state"]
