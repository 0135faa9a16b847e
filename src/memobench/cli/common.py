# Copyright (c) Syntropy Systems
"""Helpers shared by CLI commands."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from memobench.config import BenchConfig, ConfigError, load_config

if TYPE_CHECKING:
    from collections.abc import Iterable

    from memobench.harness import BenchmarkHarness
    from memobench.models.trial import RenderTarget, TrialParameters
    from memobench.results import ResultsStore

console = Console()


def get_config(ctx: typer.Context) -> BenchConfig:
    """Load config from the path given to the root command, if any."""
    obj = ctx.find_root().obj or {}
    try:
        return load_config(obj.get("config_path"))
    except (OSError, ConfigError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from e


def format_target(value: RenderTarget) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return f"{value:,}"


def format_memoized(use_memoized: bool) -> str:  # noqa: FBT001
    return "[blue]yes[/blue]" if use_memoized else "[red]no[/red]"


def build_matrix_table(matrix: Iterable[TrialParameters]) -> Table:
    """Build the test matrix table."""
    table = Table(title="Test matrix", show_header=True, header_style="bold")
    table.add_column("#", style="dim")
    table.add_column("Memoized")
    table.add_column("Depth", justify="right")
    table.add_column("Re-renders", justify="right")

    for i, params in enumerate(matrix):
        table.add_row(
            str(i),
            format_memoized(params.use_memoized),
            str(params.depth_level),
            format_target(params.max_renders),
        )
    return table


def build_results_table(store: ResultsStore) -> Table:
    """Build the completed trials table, one section per series."""
    table = Table(title="Results", show_header=True, header_style="bold")
    table.add_column("Run", style="dim", justify="right")
    table.add_column("Memoized")
    table.add_column("Depth", justify="right")
    table.add_column("Re-renders", justify="right")
    table.add_column("Time (ms)", justify="right")

    series = store.summary()
    for use_memoized, depth_level, records in series:
        for record in records:
            table.add_row(
                str(record.run_id),
                format_memoized(use_memoized),
                str(depth_level),
                format_target(record.max_renders),
                str(record.elapsed_ms),
            )
        table.add_section()

    if not series:
        table.add_row("-", "[dim]No completed trials[/dim]", "-", "-", "-")
    return table


def build_status(harness: BenchmarkHarness, render_count: int) -> Table:
    """Build the live status panel."""
    controls = harness.controls
    layout = Table.grid(padding=(0, 1))

    if harness.sequencer.active:
        launched, total = harness.sequencer.progress
        layout.add_row(f"[bold]Automatic run[/bold] {launched}/{total}")

    layout.add_row(
        f"Memoized: {format_memoized(controls.use_memoized)}  "
        f"Depth: {controls.depth_level}  "
        f"Re-renders: {format_target(controls.max_renders)}"
    )
    layout.add_row(
        f"Total component count: {harness.total_components:,} - "
        f"render count: {render_count:,}"
    )

    if harness.in_progress:
        layout.add_row("[yellow]In progress...[/yellow]")
    elif harness.runner.last_elapsed_ms is not None:
        layout.add_row(
            f"{format_target(controls.max_renders)} re-renders took: "
            f"[green]{harness.runner.last_elapsed_ms}ms[/green]"
        )
    return layout
