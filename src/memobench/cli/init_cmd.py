# Copyright (c) Syntropy Systems
"""memobench init command."""

from pathlib import Path

import typer
import yaml
from rich.console import Console

from memobench.config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, BenchConfig

console = Console()


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Write a default benchmark configuration.

    Creates a .memobench directory holding config.yaml.
    """
    target = path.resolve()
    config_dir = target / CONFIG_DIR_NAME
    config_path = config_dir / CONFIG_FILE_NAME

    if config_path.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {config_path}")
        return

    config_dir.mkdir(parents=True, exist_ok=True)
    config = BenchConfig().to_dict()
    with config_path.open("w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]Initialized memobench config:[/green] {config_path}")
