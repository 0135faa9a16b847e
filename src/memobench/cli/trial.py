# Copyright (c) Syntropy Systems
"""memobench trial command - one manually configured trial."""
from __future__ import annotations

import math

import typer

from memobench.cli.common import build_results_table, build_status, console, get_config
from memobench.harness import BenchmarkHarness


def trial(
    ctx: typer.Context,
    depth: str = typer.Option(
        "0",
        "--depth", "-d",
        help="Nesting depth below each root component",
    ),
    renders: str = typer.Option(
        "100",
        "--renders", "-r",
        help="Target re-render count",
    ),
    memo: bool = typer.Option(
        False,
        "--memo/--no-memo",
        help="Use the memoized component tree",
    ),
    max_ticks: int | None = typer.Option(
        None,
        "--max-ticks",
        help="Stop after this many ticks even if the trial is unfinished",
    ),
) -> None:
    """Run a single trial with the given parameters."""
    config = get_config(ctx)
    harness = BenchmarkHarness(config)
    controls = harness.controls

    _ = controls.set_depth_level(depth)
    target = controls.set_max_renders(renders)
    controls.set_use_memoized(memo)

    if isinstance(target, float) and math.isnan(target):
        console.print(
            f"[yellow]Re-render target {renders!r} is not a number; "
            "the trial will never complete[/yellow]"
        )
        if max_ticks is None:
            max_ticks = 1

    controls.reset()
    _ = harness.run_until_idle(max_ticks=max_ticks)

    console.print(build_status(harness, harness.counter.value))
    if harness.in_progress:
        return
    console.print(build_results_table(harness.store))
