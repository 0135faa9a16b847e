# Copyright (c) Syntropy Systems
"""Append-only store of completed trials."""
from __future__ import annotations

from typing import TYPE_CHECKING, overload

from memobench.models.trial import PlotPoint, TrialRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

    from memobench.models.trial import TrialParameters

SERIES_LABELS: dict[bool, str] = {True: "Memoized", False: "Not memoized"}


class ResultsStore:
    """Completed trials in completion order.

    Records are only ever appended; ``run_id`` is the 1-based position.
    """

    _records: list[TrialRecord]

    def __init__(self) -> None:
        self._records = []

    def append(self, params: TrialParameters, elapsed_ms: int) -> TrialRecord:
        """Record a completed trial and return its record."""
        record = TrialRecord(
            run_id=len(self._records) + 1,
            depth_level=params.depth_level,
            max_renders=params.max_renders,
            use_memoized=params.use_memoized,
            elapsed_ms=elapsed_ms,
        )
        self._records.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TrialRecord]:
        return iter(tuple(self._records))

    @overload
    def __getitem__(self, index: int) -> TrialRecord: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[TrialRecord, ...]: ...

    def __getitem__(self, index: int | slice) -> TrialRecord | tuple[TrialRecord, ...]:
        if isinstance(index, slice):
            return tuple(self._records[index])
        return self._records[index]

    @property
    def records(self) -> tuple[TrialRecord, ...]:
        """Read-only snapshot of all records."""
        return tuple(self._records)

    @property
    def last(self) -> TrialRecord | None:
        return self._records[-1] if self._records else None

    def filter(self, use_memoized: bool) -> list[TrialRecord]:  # noqa: FBT001
        """Records of one series, in completion order."""
        return [r for r in self._records if r.use_memoized == use_memoized]

    def summary(self) -> list[tuple[bool, int, list[TrialRecord]]]:
        """Group records into ``(use_memoized, depth_level, records)`` rows.

        Rows follow the order each series first completed; records inside a
        row keep completion order.
        """
        groups: dict[tuple[bool, int], list[TrialRecord]] = {}
        for record in self._records:
            key = (record.use_memoized, record.depth_level)
            groups.setdefault(key, []).append(record)
        return [(memo, depth, records) for (memo, depth), records in groups.items()]

    def plot_series(self) -> dict[str, list[PlotPoint]]:
        """Scatter series keyed by label, memoized first."""
        return {
            label: [
                PlotPoint(
                    x=record.elapsed_ms,
                    y=record.max_renders,
                    id=record.run_id,
                    z=record.depth_level,
                )
                for record in self.filter(use_memoized)
            ]
            for use_memoized, label in SERIES_LABELS.items()
        }
