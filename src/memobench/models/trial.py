# Copyright (c) Syntropy Systems
"""Pydantic models for trial parameters and results."""

from __future__ import annotations

from typing import Union

from pydantic import Field

from .base import FrozenModel, MemobenchBaseModel

# Render targets are ints, except a malformed manual entry which becomes NaN.
RenderTarget = Union[int, float]


class TrialParameters(FrozenModel):
    """Inputs for one trial."""

    depth_level: int = Field(ge=0)
    max_renders: RenderTarget
    use_memoized: bool

    def as_tuple(self) -> tuple[bool, int, RenderTarget]:
        """Return ``(use_memoized, depth_level, max_renders)``."""
        return (self.use_memoized, self.depth_level, self.max_renders)


class TrialRecord(FrozenModel):
    """A completed trial."""

    run_id: int = Field(ge=1)
    depth_level: int = Field(ge=0)
    max_renders: RenderTarget
    use_memoized: bool
    elapsed_ms: int = Field(ge=0)

    @property
    def parameters(self) -> TrialParameters:
        """Parameters the trial ran with."""
        return TrialParameters(
            depth_level=self.depth_level,
            max_renders=self.max_renders,
            use_memoized=self.use_memoized,
        )


class PlotPoint(MemobenchBaseModel):
    """Scatter point: x is time, y is re-renders, z is depth."""

    x: int
    y: RenderTarget
    id: int
    z: int
