"""
memobench - Re-render benchmark harness.

Times how long a component tree takes to re-render a fixed number of times,
memoized and not, across nesting depths.
"""

from memobench.harness import BenchmarkHarness
from memobench.matrix import generate_test_matrix
from memobench.results import ResultsStore
from memobench.runner import RunnerState, TrialRunner
from memobench.sequencer import AutomaticSequencer

__version__ = "0.1.0"
__all__ = [
    "AutomaticSequencer",
    "BenchmarkHarness",
    "ResultsStore",
    "RunnerState",
    "TrialRunner",
    "__version__",
    "generate_test_matrix",
]
