# Copyright (c) Syntropy Systems
"""Trial runner: drives one trial from reset to a recorded result."""
from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from memobench.models.trial import RenderTarget, TrialParameters, TrialRecord
    from memobench.results import ResultsStore

    CompletionListener = Callable[[TrialRecord, "RunState"], None]

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.perf_counter() * 1000


class RunnerState(str, Enum):
    """Lifecycle of the trial slot."""

    IDLE = "idle"
    COUNTING = "counting"
    DONE = "done"


@dataclass(frozen=True)
class RunState:
    """State of the live trial.

    ``start_timestamp`` is None once the trial has been recorded.
    """

    params: TrialParameters
    render_count: int
    identity_token: str
    start_timestamp: float | None
    sequenced: bool = False

    @property
    def target_renders(self) -> RenderTarget:
        return self.params.max_renders


def advance(run_state: RunState) -> tuple[RunState, bool]:
    """Apply one tick of the convergence loop.

    Returns the next state and whether the target has been reached. A target
    that compares neither below nor at-or-above the count (NaN) never
    converges.
    """
    target = run_state.target_renders
    if run_state.render_count < target:
        return replace(run_state, render_count=run_state.render_count + 1), False
    if run_state.render_count >= target:
        return run_state, True
    return run_state, False


class TrialRunner:
    """Owns the single live trial.

    ``reset`` starts a trial from scratch; ``tick`` is called once per
    completed render pass and records the trial when it converges.
    """

    _store: ResultsStore
    _clock: Callable[[], float]
    _state: RunnerState
    _run_state: RunState | None
    _last_record: TrialRecord | None
    _last_elapsed_ms: int | None
    _listeners: list[CompletionListener]

    def __init__(
        self,
        store: ResultsStore,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize a runner.

        Args:
            store: Results store completed trials are appended to
            clock: Monotonic clock returning milliseconds

        """
        self._store = store
        self._clock = clock or monotonic_ms
        self._state = RunnerState.IDLE
        self._run_state = None
        self._last_record = None
        self._last_elapsed_ms = None
        self._listeners = []

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def run_state(self) -> RunState | None:
        return self._run_state

    @property
    def last_record(self) -> TrialRecord | None:
        """Record of the current trial, once it is done."""
        return self._last_record

    @property
    def last_elapsed_ms(self) -> int | None:
        """Time of the most recently completed trial, kept across resets."""
        return self._last_elapsed_ms

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    def is_stale(self, identity_token: str) -> bool:
        """Check whether a generation token has been superseded."""
        return (
            self._run_state is None
            or self._run_state.identity_token != identity_token
        )

    def reset(self, params: TrialParameters, *, sequenced: bool = False) -> RunState:
        """Start a new trial, abandoning any trial still counting.

        Args:
            params: Parameters for the new trial
            sequenced: Whether the automatic sequencer launched this trial

        """
        if self._state is RunnerState.COUNTING and self._run_state is not None:
            logger.debug(
                "Abandoning trial %s at %s renders",
                self._run_state.identity_token,
                self._run_state.render_count,
            )

        self._run_state = RunState(
            params=params,
            render_count=1,
            identity_token=uuid.uuid4().hex,
            start_timestamp=self._clock(),
            sequenced=sequenced,
        )
        self._last_record = None
        self._state = RunnerState.COUNTING
        logger.debug("Trial %s started: %s", self._run_state.identity_token, params)
        return self._run_state

    def tick(self) -> TrialRecord | None:
        """Handle one render-completion notification.

        Returns the trial record if this tick completed the trial.
        """
        run_state = self._run_state
        if self._state is not RunnerState.COUNTING or run_state is None:
            return None

        next_state, reached = advance(run_state)
        self._run_state = next_state
        if not reached or next_state.start_timestamp is None:
            return None

        elapsed_ms = max(0, int(self._clock() - next_state.start_timestamp))
        record = self._store.append(next_state.params, elapsed_ms)
        self._run_state = replace(next_state, start_timestamp=None)
        self._last_record = record
        self._last_elapsed_ms = elapsed_ms
        self._state = RunnerState.DONE
        logger.info(
            "Trial #%d done: depth=%d renders=%s memoized=%s in %dms",
            record.run_id,
            record.depth_level,
            record.max_renders,
            record.use_memoized,
            elapsed_ms,
        )

        completed = self._run_state
        for listener in list(self._listeners):
            listener(record, completed)
        return record
