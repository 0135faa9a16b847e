# Copyright (c) Syntropy Systems
"""Scatter plot of trial time against re-render count."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt

if TYPE_CHECKING:
    from pathlib import Path

    from memobench.results import ResultsStore

# Configure matplotlib for non-interactive backend
plt.switch_backend("Agg")

logger = logging.getLogger(__name__)

SERIES_COLORS = {
    "Memoized": "blue",
    "Not memoized": "red",
}

# Log axes cannot place 0ms; such points sit just above the origin.
ZERO_TIME_FLOOR_MS = 0.5


def render_scatter(
    store: ResultsStore,
    output_path: Path,
    title: str | None = None,
) -> Path:
    """Render both result series to a log-log scatter plot.

    Args:
        store: Completed trials
        output_path: Where to save the image
        title: Optional chart title

    Returns:
        The path written.

    """
    fig, ax = plt.subplots(figsize=(6, 3))

    plotted = 0
    for label, points in store.plot_series().items():
        finite = [p for p in points if math.isfinite(p.y) and p.y > 0]
        if not finite:
            continue
        ax.scatter(
            [max(p.x, ZERO_TIME_FLOOR_MS) for p in finite],
            [p.y for p in finite],
            label=label,
            color=SERIES_COLORS.get(label),
            s=[12 + 8 * p.z for p in finite],
        )
        plotted += len(finite)

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Time (ms)")
    ax.set_ylabel("Re-renders")
    if title:
        ax.set_title(title)
    if plotted:
        ax.legend(loc="upper left")
    ax.grid(visible=True, which="both", alpha=0.3)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches="tight", facecolor="white")
    plt.close(fig)

    logger.info("Rendered %d points to %s", plotted, output_path)
    return output_path
