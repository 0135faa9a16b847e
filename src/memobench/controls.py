# Copyright (c) Syntropy Systems
"""Manual controls: two-way bindings for the next trial's parameters."""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Union

from memobench.models.trial import TrialParameters

if TYPE_CHECKING:
    from collections.abc import Callable

    from memobench.models.trial import RenderTarget

logger = logging.getLogger(__name__)

MAX_SUPPORTED_DEPTH = 1_000_000
DEFAULT_DEPTH_LEVEL = 0
DEFAULT_MAX_RENDERS = 100

NumericInput = Union[int, str]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp_depth(value: int, maximum: int = MAX_SUPPORTED_DEPTH) -> int:
    """Clamp a depth level to ``[0, maximum]``."""
    return max(0, min(value, maximum))


def parse_leading_int(text: str) -> int | None:
    """Read the integer at the start of ``text``, like ``parseInt``.

    ``"12abc"`` and ``"12.9"`` give 12; text with no leading digits gives None.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_render_target(value: NumericInput) -> RenderTarget:
    """Parse a render target; text without a leading integer becomes NaN."""
    if isinstance(value, int):
        return value
    parsed = parse_leading_int(value)
    return float("nan") if parsed is None else parsed


class ManualControls:
    """Values the next manual ``reset`` will run with."""

    depth_level: int
    max_renders: RenderTarget
    use_memoized: bool
    max_depth: int
    _on_reset: Callable[[], object] | None
    _on_start_automatic: Callable[[], object] | None

    def __init__(
        self,
        on_reset: Callable[[], object] | None = None,
        on_start_automatic: Callable[[], object] | None = None,
        max_depth: int = MAX_SUPPORTED_DEPTH,
    ) -> None:
        self.depth_level = DEFAULT_DEPTH_LEVEL
        self.max_renders = DEFAULT_MAX_RENDERS
        self.use_memoized = False
        self.max_depth = max_depth
        self._on_reset = on_reset
        self._on_start_automatic = on_start_automatic

    def set_depth_level(self, value: NumericInput) -> int:
        """Set the depth level, clamped; non-numeric text keeps the old value."""
        if isinstance(value, str):
            parsed = parse_leading_int(value)
            if parsed is None:
                logger.warning("Ignoring non-numeric depth level %r", value)
                return self.depth_level
            value = parsed
        self.depth_level = clamp_depth(value, self.max_depth)
        return self.depth_level

    def set_max_renders(self, value: NumericInput) -> RenderTarget:
        self.max_renders = parse_render_target(value)
        return self.max_renders

    def set_use_memoized(self, value: bool) -> None:  # noqa: FBT001
        self.use_memoized = value

    def apply(self, params: TrialParameters) -> None:
        """Show ``params`` in the controls."""
        self.depth_level = params.depth_level
        self.max_renders = params.max_renders
        self.use_memoized = params.use_memoized

    def parameters(self) -> TrialParameters:
        return TrialParameters(
            depth_level=self.depth_level,
            max_renders=self.max_renders,
            use_memoized=self.use_memoized,
        )

    def reset(self) -> None:
        if self._on_reset is not None:
            _ = self._on_reset()

    def start_automatic(self) -> None:
        if self._on_start_automatic is not None:
            _ = self._on_start_automatic()
