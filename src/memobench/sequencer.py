# Copyright (c) Syntropy Systems
"""Automatic sequencer that walks the test matrix one trial at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from memobench.models.trial import TrialParameters, TrialRecord
    from memobench.runner import RunState

logger = logging.getLogger(__name__)


class SequencerStep(str, Enum):
    """What to do after an automatic trial completes."""

    ADVANCE = "advance"
    STOP = "stop"


def next_step(cursor: int, length: int) -> SequencerStep:
    """Decide whether another matrix entry remains at ``cursor``."""
    return SequencerStep.ADVANCE if cursor < length else SequencerStep.STOP


@dataclass
class SequencerState:
    """Cursor into the matrix; ``active`` is False in manual mode."""

    cursor: int = 0
    active: bool = False


class AutomaticSequencer:
    """Feeds matrix entries to the trial runner, one per completed trial."""

    _matrix: tuple[TrialParameters, ...]
    _launch: Callable[[TrialParameters], object]
    _state: SequencerState

    def __init__(
        self,
        matrix: Sequence[TrialParameters],
        launch: Callable[[TrialParameters], object],
    ) -> None:
        """Initialize a sequencer.

        Args:
            matrix: Ordered trial parameters to run
            launch: Resets the trial runner with the given parameters

        """
        self._matrix = tuple(matrix)
        self._launch = launch
        self._state = SequencerState()

    @property
    def matrix(self) -> tuple[TrialParameters, ...]:
        return self._matrix

    @property
    def state(self) -> SequencerState:
        return SequencerState(cursor=self._state.cursor, active=self._state.active)

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def progress(self) -> tuple[int, int]:
        """``(launched, total)`` for display."""
        return self._state.cursor, len(self._matrix)

    def start(self) -> None:
        """Start a pass over the matrix, or relaunch at the cursor if running.

        Relaunching abandons the trial in flight. Once the last entry has been
        launched this is a no-op until the pass finishes.
        """
        if not self._state.active:
            self._state = SequencerState(cursor=0, active=True)
            logger.info("Starting automatic run of %d trials", len(self._matrix))
        elif next_step(self._state.cursor, len(self._matrix)) is SequencerStep.STOP:
            return

        if next_step(self._state.cursor, len(self._matrix)) is SequencerStep.STOP:
            self._state.active = False
            logger.info("Test matrix is empty; nothing to run")
            return
        self._launch_next()

    def on_trial_completed(self, record: TrialRecord, run_state: RunState) -> None:
        """React to a trial completion reported by the runner."""
        if not self._state.active or not run_state.sequenced:
            logger.debug("Ignoring completion of trial #%d", record.run_id)
            return

        if next_step(self._state.cursor, len(self._matrix)) is SequencerStep.ADVANCE:
            self._launch_next()
        else:
            self._state.active = False
            logger.info("Automatic run finished after %d trials", self._state.cursor)

    def _launch_next(self) -> None:
        params = self._matrix[self._state.cursor]
        self._state.cursor += 1
        logger.info(
            "Run test %d/%d: depth=%d renders=%s memoized=%s",
            self._state.cursor,
            len(self._matrix),
            params.depth_level,
            params.max_renders,
            params.use_memoized,
        )
        self._launch(params)
