# Copyright (c) Syntropy Systems
"""memobench matrix command."""
from __future__ import annotations

import typer

from memobench.cli.common import build_matrix_table, console, get_config
from memobench.matrix import generate_test_matrix


def matrix(ctx: typer.Context) -> None:
    """Show the trials an automatic run will execute, in order."""
    config = get_config(ctx)
    trials = generate_test_matrix(config.max_depth, config.render_counts)

    console.print(build_matrix_table(trials))
    console.print(f"\n[bold]{len(trials)} trials[/bold] in the test matrix")
