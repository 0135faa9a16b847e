# Copyright (c) Syntropy Systems
"""Nested component trees used as the benchmark workload."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from memobench.counter import RenderCounter
    from memobench.models.trial import TrialParameters

DEFAULT_COMPONENT_COUNT = 1000


class StaleWorkloadError(RuntimeError):
    """Raised when a workload from a superseded trial is asked to render."""


@dataclass(frozen=True)
class ComponentProps:
    """Props of one root component."""

    name: str
    nested_count: int


class ComponentTree:
    """A row of root components, each nesting ``depth_level`` children.

    Every render pass renders every component again.
    """

    memoized: bool = False

    depth_level: int
    identity_token: str
    component_count: int
    _counter: RenderCounter
    _is_stale: Callable[[str], bool] | None
    _mounted: dict[int, ComponentProps]

    def __init__(
        self,
        depth_level: int,
        identity_token: str,
        counter: RenderCounter,
        component_count: int = DEFAULT_COMPONENT_COUNT,
        is_stale: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize a workload.

        Args:
            depth_level: Children nested below each root component
            identity_token: Generation token of the trial this tree belongs to
            counter: Display counter bumped once per component activation
            component_count: Number of root components
            is_stale: Returns True once ``identity_token`` is superseded

        """
        self.depth_level = depth_level
        self.identity_token = identity_token
        self.component_count = component_count
        self._counter = counter
        self._is_stale = is_stale
        self._mounted = {}

    @property
    def total_components(self) -> int:
        return (self.depth_level + 1) * self.component_count

    @property
    def is_mounted(self) -> bool:
        return bool(self._mounted)

    def render(self) -> int:
        """Run one render pass and return the number of activations."""
        if self._is_stale is not None and self._is_stale(self.identity_token):
            msg = f"Workload {self.identity_token} belongs to a finished generation"
            raise StaleWorkloadError(msg)

        activations = 0
        for index in range(self.component_count):
            props = ComponentProps(name=f"Test{index}", nested_count=self.depth_level)
            if self._should_skip(index, props):
                continue
            activations += self._render_component(props.name, props.nested_count)
            self._mounted[index] = props
        return activations

    def _should_skip(self, index: int, props: ComponentProps) -> bool:
        _ = index, props
        return False

    def _render_component(self, name: str, nested_count: int) -> int:
        self._counter.increment()
        activations = 1
        if nested_count != 0:
            activations += self._render_component(
                name + str(nested_count), nested_count - 1
            )
        return activations


class MemoizedComponentTree(ComponentTree):
    """Tree whose root components skip re-rendering when props are unchanged."""

    memoized = True

    def _should_skip(self, index: int, props: ComponentProps) -> bool:
        return self._mounted.get(index) == props


def make_workload(
    params: TrialParameters,
    identity_token: str,
    counter: RenderCounter,
    component_count: int = DEFAULT_COMPONENT_COUNT,
    is_stale: Callable[[str], bool] | None = None,
) -> ComponentTree:
    """Mount the workload variant selected by ``params.use_memoized``."""
    cls = MemoizedComponentTree if params.use_memoized else ComponentTree
    return cls(
        depth_level=params.depth_level,
        identity_token=identity_token,
        counter=counter,
        component_count=component_count,
        is_stale=is_stale,
    )
