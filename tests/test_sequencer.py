# Copyright (c) Syntropy Systems
"""Tests for the automatic sequencer."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from memobench.matrix import generate_test_matrix
from memobench.models.trial import TrialParameters
from memobench.results import ResultsStore
from memobench.runner import RunnerState, TrialRunner
from memobench.sequencer import AutomaticSequencer, SequencerStep, next_step


class TestNextStep:
    """Tests for the pure advance/stop decision."""

    @pytest.mark.parametrize(
        ("cursor", "length", "expected"),
        [
            (0, 3, SequencerStep.ADVANCE),
            (2, 3, SequencerStep.ADVANCE),
            (3, 3, SequencerStep.STOP),
            (0, 0, SequencerStep.STOP),
        ],
    )
    def test_next_step(self, cursor: int, length: int, expected: SequencerStep) -> None:
        """Test that another trial runs only while the cursor is in range."""
        assert next_step(cursor, length) is expected


def wire(
    matrix: tuple[TrialParameters, ...], clock: Callable[[], float]
) -> tuple[TrialRunner, AutomaticSequencer, ResultsStore]:
    store = ResultsStore()
    runner = TrialRunner(store, clock=clock)
    holder: list[AutomaticSequencer] = []

    def launch(params: TrialParameters) -> None:
        _ = runner.reset(params, sequenced=holder[0].active)

    sequencer = AutomaticSequencer(matrix, launch=launch)
    holder.append(sequencer)
    runner.add_completion_listener(sequencer.on_trial_completed)
    return runner, sequencer, store


def drain(runner: TrialRunner, limit: int = 10_000) -> None:
    for _ in range(limit):
        if runner.state is not RunnerState.COUNTING:
            return
        _ = runner.tick()


class TestAutomaticSequencer:
    """Tests for AutomaticSequencer."""

    def test_starts_inactive(self, clock) -> None:
        """Test that the sequencer begins in manual mode."""
        _, sequencer, _ = wire(generate_test_matrix(0, [1]), clock)

        assert sequencer.active is False
        assert sequencer.cursor == 0

    def test_start_launches_first_entry(self, clock) -> None:
        """Test that start applies matrix[0] and moves the cursor to 1."""
        matrix = generate_test_matrix(1, [2, 3])
        runner, sequencer, _ = wire(matrix, clock)

        sequencer.start()

        assert sequencer.active is True
        assert sequencer.cursor == 1
        assert runner.run_state is not None
        assert runner.run_state.params == matrix[0]
        assert runner.run_state.sequenced is True

    def test_exhausts_matrix_in_order(self, clock) -> None:
        """Test that a full pass records every entry once, in matrix order."""
        matrix = generate_test_matrix(2, [1, 10])
        runner, sequencer, store = wire(matrix, clock)

        sequencer.start()
        drain(runner)

        assert len(store) == len(matrix) == 12
        assert [r.parameters for r in store] == list(matrix)
        assert sequencer.active is False
        assert sequencer.cursor == len(matrix)

    def test_cursor_advances_by_one_per_completion(self, clock) -> None:
        """Test that each automatic completion moves the cursor by one."""
        matrix = generate_test_matrix(0, [2, 2, 2])
        runner, sequencer, _ = wire(matrix, clock)

        sequencer.start()
        cursors = [sequencer.cursor]
        while runner.state is RunnerState.COUNTING:
            if runner.tick() is not None:
                cursors.append(sequencer.cursor)

        assert cursors == [1, 2, 3, 4, 5, 6, 6]

    def test_manual_completion_does_not_advance(self, clock) -> None:
        """Test that a manual trial leaves the cursor alone."""
        matrix = generate_test_matrix(0, [1])
        runner, sequencer, store = wire(matrix, clock)

        _ = runner.reset(TrialParameters(depth_level=0, max_renders=2, use_memoized=False))
        drain(runner)

        assert len(store) == 1
        assert sequencer.cursor == 0
        assert sequencer.active is False

    def test_manual_run_after_finish(self, clock) -> None:
        """Test that manual runs after an automatic pass do not restart it."""
        matrix = generate_test_matrix(0, [1])
        runner, sequencer, store = wire(matrix, clock)
        sequencer.start()
        drain(runner)
        assert sequencer.active is False

        _ = runner.reset(matrix[0])
        drain(runner)

        assert len(store) == len(matrix) + 1
        assert sequencer.cursor == len(matrix)
        assert sequencer.active is False

    def test_restart_after_finish_begins_at_zero(self, clock) -> None:
        """Test that start after exhaustion runs a new pass from the top."""
        matrix = generate_test_matrix(0, [1, 2])
        runner, sequencer, store = wire(matrix, clock)
        sequencer.start()
        drain(runner)

        sequencer.start()
        assert sequencer.cursor == 1
        drain(runner)

        assert len(store) == 2 * len(matrix)
        assert [r.parameters for r in store[len(matrix):]] == list(matrix)

    def test_start_while_active_relaunches_at_cursor(self, clock) -> None:
        """Test that start mid-run abandons the trial in flight and moves on."""
        matrix = generate_test_matrix(0, [3, 4, 5])
        runner, sequencer, store = wire(matrix, clock)
        sequencer.start()
        _ = runner.tick()

        sequencer.start()

        assert sequencer.cursor == 2
        assert runner.run_state is not None
        assert runner.run_state.params == matrix[1]
        drain(runner)
        assert matrix[0] not in [r.parameters for r in store]
        assert len(store) == len(matrix) - 1

    def test_start_while_last_trial_running_is_noop(self, clock) -> None:
        """Test that start does nothing once the last entry is in flight."""
        matrix = generate_test_matrix(0, [3])
        runner, sequencer, store = wire(matrix, clock)
        sequencer.start()
        while sequencer.cursor < len(matrix):
            _ = runner.tick()
        token = runner.run_state.identity_token if runner.run_state else None

        sequencer.start()

        assert runner.run_state is not None
        assert runner.run_state.identity_token == token
        drain(runner)
        assert len(store) == len(matrix)

    def test_empty_matrix(self, clock) -> None:
        """Test that an empty matrix stops straight away."""
        runner, sequencer, store = wire((), clock)

        sequencer.start()

        assert sequencer.active is False
        assert runner.state is RunnerState.IDLE
        assert len(store) == 0
