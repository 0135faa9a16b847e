# Copyright (c) Syntropy Systems
"""Test matrix generation."""
from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from memobench.models.trial import TrialParameters

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_MAX_DEPTH = 2
DEFAULT_RENDER_COUNTS: tuple[int, ...] = (1, 10, 100, 500, 1000)
# Memoized trials run first.
MEMOIZATION_SETTINGS: tuple[bool, ...] = (True, False)


def matrix_size(
    max_depth: int,
    render_counts: Sequence[int],
    memo_settings: Sequence[bool] = MEMOIZATION_SETTINGS,
) -> int:
    """Number of trials in the matrix for the given axes."""
    return len(memo_settings) * (max_depth + 1) * len(render_counts)


def generate_test_matrix(
    max_depth: int = DEFAULT_MAX_DEPTH,
    render_counts: Sequence[int] = DEFAULT_RENDER_COUNTS,
    memo_settings: Sequence[bool] = MEMOIZATION_SETTINGS,
) -> tuple[TrialParameters, ...]:
    """Build the ordered trial matrix.

    Outer axis is the memoization setting, then depth ``0..max_depth``
    ascending, then the render counts in the order given. The result is a
    tuple so it can't be mutated once built.
    """
    if max_depth < 0:
        msg = f"max_depth must be >= 0, got {max_depth}"
        raise ValueError(msg)

    return tuple(
        TrialParameters(
            depth_level=depth_level,
            max_renders=max_renders,
            use_memoized=use_memoized,
        )
        for use_memoized, depth_level, max_renders in itertools.product(
            memo_settings, range(max_depth + 1), render_counts
        )
    )
