# Copyright (c) Syntropy Systems
"""Main CLI entry point for memobench."""
from __future__ import annotations

import logging
from pathlib import Path

import typer

from memobench.cli.init_cmd import init
from memobench.cli.matrix_cmd import matrix
from memobench.cli.run_cmd import run
from memobench.cli.trial import trial

app = typer.Typer(
    name="memobench",
    help=(
        "Re-render benchmark harness. Time memoized and plain component "
        "trees across nesting depths."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config", "-c",
        help="Config file (default: nearest .memobench/config.yaml)",
        exists=True,
        dir_okay=False,
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level",
    ),
) -> None:
    """Shared options."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.obj = {"config_path": config}


# Register commands
_ = app.command()(init)
_ = app.command()(matrix)
_ = app.command()(run)
_ = app.command()(trial)


if __name__ == "__main__":
    app()
