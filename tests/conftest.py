# Copyright (c) Syntropy Systems
"""Pytest fixtures for memobench tests."""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from memobench.config import BenchConfig
from memobench.harness import BenchmarkHarness

# Store original cwd at module load time
_original_cwd = Path.cwd()


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1000.0, step: float = 0.0) -> None:
        self.now = start
        self.step = step

    def advance(self, ms: float) -> None:
        self.now += ms

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_dir(temp_dir: Path) -> Generator[Path, None, None]:
    """Run inside an empty directory so no stray config is picked up."""
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clock_factory() -> Callable[..., FakeClock]:
    """Build clocks with a custom start and per-read step."""
    return FakeClock


@pytest.fixture
def small_config() -> BenchConfig:
    """Config with a tiny workload so trials run fast."""
    return BenchConfig(max_depth=2, render_counts=[1, 10], component_count=3)


@pytest.fixture
def harness(small_config: BenchConfig, clock: FakeClock) -> BenchmarkHarness:
    return BenchmarkHarness(small_config, clock=clock)
