# Copyright (c) Syntropy Systems
"""memobench run command - automatic pass over the test matrix."""
from __future__ import annotations

from pathlib import Path

import typer
from rich.live import Live

from memobench.cli.common import (
    build_results_table,
    build_status,
    console,
    get_config,
)
from memobench.counter import CounterPoller
from memobench.harness import BenchmarkHarness
from memobench.plot import render_scatter


def run(
    ctx: typer.Context,
    plot: Path | None = typer.Option(
        None,
        "--plot", "-p",
        help="Save the scatter plot to this image file",
    ),
    interval: float | None = typer.Option(
        None,
        "--interval", "-i",
        help="Render counter refresh interval in seconds",
    ),
    live: bool = typer.Option(
        True,
        "--live/--no-live",
        help="Show a live status panel while trials run",
    ),
) -> None:
    """Run every trial in the test matrix, one after another."""
    config = get_config(ctx)
    harness = BenchmarkHarness(config)

    console.print(f"[dim]Running {len(harness.matrix)} trials...[/dim]")
    harness.start_automatic()

    if live:
        with Live(console=console, refresh_per_second=4, transient=True) as display:

            def refresh(render_count: int) -> None:
                display.update(build_status(harness, render_count))

            with CounterPoller(
                harness.counter,
                refresh,
                interval=interval or config.display_interval,
            ):
                _ = harness.run_until_idle()
    else:
        _ = harness.run_until_idle()

    console.print(build_results_table(harness.store))
    console.print(f"\n[green]Completed {len(harness.store)} trials[/green]")

    plot_path = plot or (Path(config.plot_path) if config.plot_path else None)
    if plot_path is not None:
        try:
            _ = render_scatter(harness.store, plot_path, title="Re-renders vs time")
        except (OSError, ValueError) as e:
            console.print(f"[red]Error writing plot:[/red] {e}")
            raise typer.Exit(1) from e
        console.print(f"  [dim]plot:[/dim] {plot_path}")
