# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for memobench."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class MemobenchBaseModel(BaseModel):
    """Base model with shared config for memobench schemas."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class FrozenModel(BaseModel):
    """Immutable model; instances are hashable and compare by value."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
