"""Tests for the CLI interface."""

from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from readpace.cli import app, format_projection_cell
from readpace.reading.projection import ReadingProjection


TODAY = "2025-03-20"


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Forecast when you will finish" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestStatusCommand:
    """Tests for status command."""

    @pytest.mark.parametrize(
        "pages,expected",
        [("0", "not_started"), ("150", "reading"), ("300", "completed")],
    )
    def test_status(self, runner: CliRunner, pages: str, expected: str):
        result = runner.invoke(app, ["status", pages, "300"])
        assert result.exit_code == 0
        assert expected in result.stdout

    def test_negative_pages_rejected(self, runner: CliRunner):
        result = runner.invoke(app, ["status", "--", "-1", "300"])
        assert result.exit_code != 0


class TestProjectCommand:
    """Tests for project command."""

    def test_table(self, runner: CliRunner, snapshot_file: Path):
        """Test the dashboard table lists books being read."""
        result = runner.invoke(app, ["project", str(snapshot_file), "--today", TODAY])

        assert result.exit_code == 0
        assert "Dom Casmurro" in result.stdout
        assert "Os Sertões" in result.stdout
        assert "Iracema" not in result.stdout
        assert "25 mar 2025" in result.stdout
        assert "30 mar 2025" in result.stdout

    def test_table_all(self, runner: CliRunner, snapshot_file: Path):
        """Test --all includes books without a projection."""
        result = runner.invoke(app, ["project", str(snapshot_file), "--today", TODAY, "--all"])

        assert result.exit_code == 0
        assert "Iracema" in result.stdout

    def test_single_book_pace(self, runner: CliRunner, snapshot_file: Path):
        """Test the breakdown for a pace-based projection."""
        result = runner.invoke(
            app, ["project", str(snapshot_file), "--book", "casmurro", "--today", TODAY]
        )

        assert result.exit_code == 0
        assert "Estimated finish: 25 de março de 2025" in result.stdout
        assert "Days remaining: 5" in result.stdout
        assert "Pace: 30.0 pages/day" in result.stdout
        assert "Reading days: 5" in result.stdout

    def test_single_book_target(self, runner: CliRunner, snapshot_file: Path):
        """Test the breakdown for a target-date projection."""
        result = runner.invoke(
            app, ["project", str(snapshot_file), "--book", "sertoes", "--today", TODAY]
        )

        assert result.exit_code == 0
        assert "Target date: 30 de março de 2025" in result.stdout
        assert "Pace: 50.0 pages/day" in result.stdout

    def test_single_book_completed(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(
            app, ["project", str(snapshot_file), "--book", "iracema", "--today", TODAY]
        )

        assert result.exit_code == 0
        assert "No projection available" in result.stdout

    def test_delay_shown(self, runner: CliRunner, snapshot_file: Path):
        """Test a reader who stopped sees the delay."""
        result = runner.invoke(
            app, ["project", str(snapshot_file), "--book", "casmurro", "--today", "2025-03-26"]
        )

        assert result.exit_code == 0
        assert "Delayed by 5 day(s)" in result.stdout

    def test_book_not_found(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(app, ["project", str(snapshot_file), "--book", "missing"])

        assert result.exit_code == 1
        assert "Book not found" in result.stdout

    def test_missing_snapshot(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(app, ["project", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_invalid_today(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(app, ["project", str(snapshot_file), "--today", "20/03/2025"])

        assert result.exit_code == 1
        assert "Invalid date" in result.stdout

    def test_malformed_config(self, runner: CliRunner, snapshot_file: Path, monkeypatch):
        monkeypatch.setenv("READPACE_MIN_READING_DAYS", "three")

        result = runner.invoke(app, ["project", str(snapshot_file), "--today", TODAY])

        assert result.exit_code == 1
        assert "READPACE_MIN_READING_DAYS must be an integer" in result.stdout


class TestMetricsCommand:
    """Tests for metrics command."""

    def test_metrics(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(app, ["metrics", str(snapshot_file), "casmurro", "--today", TODAY])

        assert result.exit_code == 0
        assert "50.0%" in result.stdout
        assert "Page 150 of 300" in result.stdout
        assert "Reading days: 5" in result.stdout
        assert "Time spent: 2h 30min" in result.stdout
        assert "Last read: 20 mar 2025" in result.stdout

    def test_metrics_book_not_found(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(app, ["metrics", str(snapshot_file), "missing"])

        assert result.exit_code == 1
        assert "Book not found" in result.stdout


class TestFormatProjectionCell:
    """Tests for the dashboard forecast cell."""

    def test_hidden(self):
        assert format_projection_cell(ReadingProjection()) == "-"

    def test_date_and_delay(self):
        cell = format_projection_cell(
            ReadingProjection(
                estimated_date=date(2025, 4, 2), is_delayed=True, delay_days=2, can_show=True
            )
        )
        assert "2 abr 2025" in cell
        assert "2d" in cell

    def test_too_few_days(self):
        cell = format_projection_cell(ReadingProjection(reading_days_observed=2, can_show=True))
        assert "2 reading day(s)" in cell
