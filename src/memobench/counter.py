# Copyright (c) Syntropy Systems
"""Display render counter and its background poller."""
from __future__ import annotations

import logging
from threading import Event, Lock, Thread
from typing import TYPE_CHECKING

from typing_extensions import Self

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger = logging.getLogger(__name__)


class RenderCounter:
    """Free-running count of component activations.

    Only used for human feedback; the measurement path counts renders
    separately in the trial runner.
    """

    _value: int
    _lock: Lock

    def __init__(self) -> None:
        self._value = 0
        self._lock = Lock()

    def increment(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        return self._value


class CounterPoller:
    """Background thread that samples a counter on a fixed interval.

    The sampled value is handed to ``callback``. Use as a context manager so
    the thread is always stopped on teardown.
    """

    _counter: RenderCounter
    _callback: Callable[[int], None]
    _interval: float
    _stop_event: Event
    _thread: Thread | None

    def __init__(
        self,
        counter: RenderCounter,
        callback: Callable[[int], None],
        interval: float = 1.0,
    ) -> None:
        """Initialize poller.

        Args:
            counter: Counter to sample
            callback: Receives each sampled value
            interval: Sampling interval in seconds

        """
        self._counter = counter
        self._callback = callback
        self._interval = interval
        self._stop_event = Event()
        self._thread = None

    def start(self) -> None:
        """Start background polling."""
        if self._thread is not None:
            return

        self._stop_event.clear()
        self._thread = Thread(target=self._poll_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop background polling."""
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=2.0)
        self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def _poll_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self._callback(self._counter.value)
            except Exception as exc:
                logger.exception("Render counter display callback failed", exc_info=exc)

            _ = self._stop_event.wait(timeout=self._interval)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()
