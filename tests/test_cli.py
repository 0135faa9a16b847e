# Copyright (c) Syntropy Systems
"""Tests for memobench CLI commands."""

from pathlib import Path

import yaml
from typer.testing import CliRunner

from memobench.cli.common import build_results_table
from memobench.cli.main import app
from memobench.models.trial import TrialParameters
from memobench.results import ResultsStore

runner = CliRunner()

SMALL_CONFIG = """
max_depth: 1
render_counts: [1, 3]
component_count: 2
display_interval: 0.05
"""


def write_small_config(project_dir: Path) -> Path:
    config_dir = project_dir / ".memobench"
    config_dir.mkdir(exist_ok=True)
    path = config_dir / "config.yaml"
    _ = path.write_text(SMALL_CONFIG)
    return path


class TestInitCommand:
    """Tests for memobench init."""

    def test_init_writes_config(self, project_dir: Path) -> None:
        """Test that init writes the default config file."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        path = project_dir / ".memobench" / "config.yaml"
        assert path.exists()
        data = yaml.safe_load(path.read_text())
        assert data["max_depth"] == 2
        assert data["render_counts"] == [1, 10, 100, 500, 1000]

    def test_init_already_initialized(self, project_dir: Path) -> None:
        """Test init when the config already exists."""
        _ = write_small_config(project_dir)

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Already initialized" in result.stdout


class TestMatrixCommand:
    """Tests for memobench matrix."""

    def test_matrix_lists_trials(self, project_dir: Path) -> None:
        """Test that the matrix command reports the trial count."""
        _ = write_small_config(project_dir)

        result = runner.invoke(app, ["matrix"])

        assert result.exit_code == 0
        assert "8 trials" in result.stdout

    def test_bad_config(self, project_dir: Path) -> None:
        """Test that an invalid config is reported."""
        path = project_dir / "bad.yaml"
        _ = path.write_text("render_counts: []\n")

        result = runner.invoke(app, ["--config", str(path), "matrix"])

        assert result.exit_code == 1
        assert "Error loading config" in result.stdout


class TestRunCommand:
    """Tests for memobench run."""

    def test_run_all_trials(self, project_dir: Path) -> None:
        """Test an automatic run without the live panel."""
        _ = write_small_config(project_dir)

        result = runner.invoke(app, ["run", "--no-live"])

        assert result.exit_code == 0
        assert "Completed 8 trials" in result.stdout

    def test_run_live_with_plot(self, project_dir: Path) -> None:
        """Test an automatic run with the live panel and a plot."""
        _ = write_small_config(project_dir)
        plot_path = project_dir / "scatter.png"

        result = runner.invoke(app, ["run", "--plot", str(plot_path), "-i", "0.01"])

        assert result.exit_code == 0
        assert "Completed 8 trials" in result.stdout
        assert plot_path.exists()


class TestTrialCommand:
    """Tests for memobench trial."""

    def test_trial(self, project_dir: Path) -> None:
        """Test one manual trial."""
        _ = write_small_config(project_dir)

        result = runner.invoke(
            app, ["trial", "--depth", "1", "--renders", "5", "--memo"]
        )

        assert result.exit_code == 0
        assert "5 re-renders took" in result.stdout
        assert "Results" in result.stdout

    def test_trial_malformed_target(self, project_dir: Path) -> None:
        """Test that a non-numeric target reports an unfinished trial."""
        _ = write_small_config(project_dir)

        result = runner.invoke(app, ["trial", "--renders", "many"])

        assert result.exit_code == 0
        assert "not a number" in result.stdout
        assert "In progress" in result.stdout


class TestResultsTable:
    """Tests for the grouped results table."""

    def test_rows_grouped_by_series(self) -> None:
        """Test that the table lists every record, grouped by series."""
        store = ResultsStore()
        for depth, memo in [(0, True), (1, True), (0, True)]:
            _ = store.append(
                TrialParameters(depth_level=depth, max_renders=5, use_memoized=memo), 2
            )

        table = build_results_table(store)

        assert table.row_count == 3
        run_column = table.columns[0]
        assert list(run_column.cells) == ["1", "3", "2"]
