"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from mlstudio import __version__
from mlstudio.cli import app

runner = CliRunner()


@pytest.fixture
def fast_config(tmp_path: Path) -> Path:
    """Config file with a small sample and no latency."""
    path = tmp_path / "engine.yaml"
    path.write_text(
        """
simulation:
  n_epochs: 3
  epoch_delay_s: 0
  prediction_delay_s: 0
  random_state: 5
datasets:
  sample_rows: 100
  sample_seed: 1
logging:
  level: WARNING
"""
    )
    return path


class TestCli:
    """Tests for CLI commands."""

    def test_version(self) -> None:
        """Test version output."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_datasets(self, fast_config: Path) -> None:
        """Test the dataset listing."""
        result = runner.invoke(app, ["datasets", "--config", str(fast_config)])
        assert result.exit_code == 0
        assert "default-dataset" in result.stdout

    def test_features(self, fast_config: Path) -> None:
        """Test the feature ranking."""
        result = runner.invoke(
            app, ["features", "--config", str(fast_config), "--limit", "2"]
        )
        assert result.exit_code == 0
        assert "credit_score" in result.stdout
        assert "income" in result.stdout
        assert "age" not in result.stdout

    def test_histogram(self, fast_config: Path) -> None:
        """Test a categorical histogram."""
        result = runner.invoke(
            app, ["histogram", "home_ownership", "--config", str(fast_config)]
        )
        assert result.exit_code == 0
        assert "RENT" in result.stdout

    def test_histogram_unknown_feature(self, fast_config: Path) -> None:
        """Test that an unknown feature exits with an error."""
        result = runner.invoke(
            app, ["histogram", "nope", "--config", str(fast_config)]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_train(self, fast_config: Path) -> None:
        """Test a fast training run."""
        result = runner.invoke(
            app,
            ["train", "--config", str(fast_config), "--name", "CLI Model", "--fast"],
        )
        assert result.exit_code == 0
        assert "CLI Model" in result.stdout
        assert "accuracy" in result.stdout

    def test_train_invalid_split(self, fast_config: Path) -> None:
        """Test that an out-of-range split is rejected."""
        result = runner.invoke(
            app,
            ["train", "--config", str(fast_config), "-p", "95", "--fast"],
        )
        assert result.exit_code == 1
        assert "Invalid training configuration" in result.stdout

    def test_predict(self, fast_config: Path) -> None:
        """Test scoring the default application."""
        result = runner.invoke(app, ["predict", "--config", str(fast_config), "--fast"])
        assert result.exit_code == 0
        assert "APPROVED" in result.stdout

    def test_predict_invalid_default_flag(self, fast_config: Path) -> None:
        """Test that has_default must be yes or no."""
        result = runner.invoke(
            app,
            ["predict", "--config", str(fast_config), "--has-default", "maybe"],
        )
        assert result.exit_code == 1
