# Copyright (c) Syntropy Systems
"""Benchmark harness: wires the runner, sequencer, store and workload."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from memobench.config import BenchConfig
from memobench.controls import ManualControls
from memobench.counter import RenderCounter
from memobench.matrix import generate_test_matrix
from memobench.results import ResultsStore
from memobench.runner import RunnerState, TrialRunner
from memobench.sequencer import AutomaticSequencer
from memobench.workload import make_workload

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from memobench.models.trial import TrialParameters, TrialRecord
    from memobench.runner import RunState
    from memobench.workload import ComponentTree

logger = logging.getLogger(__name__)


class BenchmarkHarness:
    """Single-threaded benchmark session.

    Each ``step`` is one scheduling tick: the mounted workload renders once,
    then the runner is notified that the render completed. Trials launched by
    the sequencer from inside a completion run on the following ticks.
    """

    config: BenchConfig
    counter: RenderCounter
    store: ResultsStore
    runner: TrialRunner
    matrix: tuple[TrialParameters, ...]
    controls: ManualControls
    sequencer: AutomaticSequencer
    _workload: ComponentTree | None

    def __init__(
        self,
        config: BenchConfig | None = None,
        *,
        matrix: Sequence[TrialParameters] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize a harness.

        Args:
            config: Benchmark configuration (defaults if omitted)
            matrix: Trial matrix override; generated from config otherwise
            clock: Monotonic millisecond clock for the runner

        """
        self.config = config or BenchConfig()
        self.counter = RenderCounter()
        self.store = ResultsStore()
        self.runner = TrialRunner(self.store, clock=clock)
        if matrix is None:
            matrix = generate_test_matrix(
                self.config.max_depth, self.config.render_counts
            )
        self.matrix = tuple(matrix)
        self.controls = ManualControls(
            on_reset=self.reset,
            on_start_automatic=self.start_automatic,
            max_depth=self.config.max_supported_depth,
        )
        self.sequencer = AutomaticSequencer(self.matrix, launch=self._launch)
        self.runner.add_completion_listener(self.sequencer.on_trial_completed)
        self._workload = None

    @property
    def workload(self) -> ComponentTree | None:
        return self._workload

    @property
    def in_progress(self) -> bool:
        return self.runner.state is RunnerState.COUNTING

    @property
    def total_components(self) -> int:
        return (self.controls.depth_level + 1) * self.config.component_count

    def reset(self) -> RunState:
        """Start a trial from the current control values."""
        params = self.controls.parameters()
        self.counter.reset()
        run_state = self.runner.reset(params, sequenced=self.sequencer.active)
        self._workload = make_workload(
            params,
            run_state.identity_token,
            self.counter,
            component_count=self.config.component_count,
            is_stale=self.runner.is_stale,
        )
        return run_state

    def start_automatic(self) -> None:
        self.sequencer.start()

    def _launch(self, params: TrialParameters) -> None:
        self.controls.apply(params)
        _ = self.reset()

    def step(self) -> TrialRecord | None:
        """Run one tick. Returns the record if a trial completed."""
        if self._workload is None or self.runner.state is not RunnerState.COUNTING:
            return None
        _ = self._workload.render()
        return self.runner.tick()

    def run_until_idle(self, max_ticks: int | None = None) -> int:
        """Tick until no trial is counting, or ``max_ticks`` ticks have run.

        Returns the number of ticks run. A trial with an unreachable target
        only stops at ``max_ticks``.
        """
        ticks = 0
        while self.runner.state is RunnerState.COUNTING:
            if max_ticks is not None and ticks >= max_ticks:
                logger.debug("Tick limit %d reached with trial in progress", max_ticks)
                break
            _ = self.step()
            ticks += 1
        return ticks
