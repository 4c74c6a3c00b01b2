"""
Tests for the command line interface.
"""

import json

from typer.testing import CliRunner

from bookingwindow import __version__
from bookingwindow.cli.app import NOT_BOOKABLE_EXIT_CODE, app

runner = CliRunner()

NOW = "2024-01-01T00:00:00Z"  # Monday

CONFIG_YAML = """
timezone: UTC
event_types:
  - slug: intro
    title: Intro
    minimum_booking_notice: 60
    period:
      periodType: ROLLING
      periodDays: 2
      periodCountCalendarDays: true
  - slug: window
    period:
      periodType: ROLLING_WINDOW
      periodDays: 2
      periodCountCalendarDays: true
"""


def _config(tmp_path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return str(path)


def test_limits_shows_rolling_end(tmp_path):
    """The rolling end day should be shown in the booker timezone."""
    result = runner.invoke(app, ["limits", "intro", "--config", _config(tmp_path), "--now", NOW])

    assert result.exit_code == 0, result.output
    assert "03.01.2024 23:59" in result.output


def test_limits_uses_availability_file(tmp_path):
    """Rolling windows should be resolved from the given availability file."""
    availability = tmp_path / "availability.json"
    availability.write_text(
        json.dumps({"2024-01-04": {"isBookable": True}, "2024-01-09": {"isBookable": True}}),
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "limits", "window",
            "--config", _config(tmp_path),
            "--availability", str(availability),
            "--now", NOW,
        ],
    )

    assert result.exit_code == 0, result.output
    assert "09.01.2024" in result.output


def test_check_bookable_slot(tmp_path):
    """A slot inside the window should be reported as bookable."""
    result = runner.invoke(
        app,
        ["check", "intro", "2024-01-02T10:00", "--config", _config(tmp_path), "--now", NOW],
    )

    assert result.exit_code == 0, result.output
    assert "Bookable" in result.output


def test_check_slot_too_far_ahead(tmp_path):
    """A slot after the rolling end should be rejected."""
    result = runner.invoke(
        app,
        ["check", "intro", "2024-01-05T10:00", "--config", _config(tmp_path), "--now", NOW],
    )

    assert result.exit_code == NOT_BOOKABLE_EXIT_CODE
    assert "Outside the booking window" in result.output


def test_check_past_slot(tmp_path):
    """A slot in the past should be reported as such."""
    result = runner.invoke(
        app,
        ["check", "intro", "2023-12-31T10:00", "--config", _config(tmp_path), "--now", NOW],
    )

    assert result.exit_code == NOT_BOOKABLE_EXIT_CODE
    assert "already passed" in result.output


def test_check_minimum_notice(tmp_path):
    """A slot inside the minimum notice should be rejected."""
    result = runner.invoke(
        app,
        ["check", "intro", "2024-01-01T00:30", "--config", _config(tmp_path), "--now", NOW],
    )

    assert result.exit_code == NOT_BOOKABLE_EXIT_CODE
    assert "minimum booking notice" in result.output


def test_unknown_event_type(tmp_path):
    """Unknown slugs should fail with exit code 1."""
    result = runner.invoke(app, ["limits", "nope", "--config", _config(tmp_path)])

    assert result.exit_code == 1
    assert "Unknown event type" in result.output


def test_missing_config(tmp_path):
    """A missing config file should fail with exit code 1."""
    result = runner.invoke(app, ["list-event-types", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_list_event_types(tmp_path):
    """All configured event types should be listed."""
    result = runner.invoke(app, ["list-event-types", "--config", _config(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "intro" in result.output
    assert "window" in result.output


def test_version():
    """The version command should print the package version."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_check_rejects_duration_as_slot_time(tmp_path):
    """An ISO duration is not a slot time and should fail with exit code 1."""
    result = runner.invoke(app, ["check", "intro", "P1D", "--config", _config(tmp_path), "--now", NOW])

    assert result.exit_code == 1
    assert "Error parsing slot time" in result.output


def test_now_must_be_a_date_time(tmp_path):
    """An ISO duration passed as --now should fail with exit code 1."""
    result = runner.invoke(app, ["limits", "intro", "--config", _config(tmp_path), "--now", "P1D"])

    assert result.exit_code == 1
    assert "Error parsing --now" in result.output
