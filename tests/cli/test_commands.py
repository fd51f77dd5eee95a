"""
Tests for the tempus CLI commands.

Uses typer.testing.CliRunner; the clock is pinned through TEMPUS_FIXED_NOW
where output depends on the current instant.
"""

from __future__ import annotations

import json
import time

import pytest
from typer.testing import CliRunner

from tempus.cli.app import app
from tempus.core.clock import SystemClock, get_clock

runner = CliRunner()

REF = "ts:2023-06-15T10:20:30Z"
HOUR_NANOS = "dur:3600000000000"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TEMPUS_LOG_LEVEL", "TEMPUS_LOG_JSON", "TEMPUS_FIXED_NOW", "TEMPUS_FORMAT_PATTERN"):
        monkeypatch.delenv(name, raising=False)


class TestRootApp:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "tempus 0.1.0" in result.stdout

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "call" in result.stdout

    def test_invalid_config_exits(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_LOG_LEVEL", "chatty")
        result = runner.invoke(app, ["functions", "--json"])
        assert result.exit_code == 2


class TestFunctionsCommand:
    def test_json_listing(self):
        result = runner.invoke(app, ["functions", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        names = [entry["name"] for entry in data]
        assert len(names) == 17
        assert "time::group" in names
        floor = next(entry for entry in data if entry["name"] == "time::floor")
        assert (floor["min_args"], floor["max_args"]) == (2, 2)

    def test_table(self):
        result = runner.invoke(app, ["functions"])
        assert result.exit_code == 0
        assert "time::year" in result.stdout


class TestCallCommand:
    def test_extractor(self):
        result = runner.invoke(app, ["call", "time::year", REF])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2023"

    def test_floor(self):
        result = runner.invoke(app, ["call", "time::floor", REF, HOUR_NANOS])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2023-06-15T10:00:00+00:00"

    def test_group(self):
        result = runner.invoke(app, ["call", "time::group", REF, "month"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2023-06-01T00:00:00+00:00"

    def test_format(self):
        result = runner.invoke(app, ["call", "time::format", REF, "%A %-d %B"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Thursday 15 June"

    def test_soft_null(self):
        result = runner.invoke(app, ["call", "time::year", "none"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "NONE"

    def test_json_output(self):
        result = runner.invoke(app, ["call", "time::nano", REF, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"type": "Number", "value": 1_686_824_430_000_000_000}

    def test_unknown_group_unit_exits_1(self):
        result = runner.invoke(app, ["call", "time::group", REF, "fortnight"])
        assert result.exit_code == 1

    def test_error_json(self):
        result = runner.invoke(app, ["call", "time::group", REF, "fortnight", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["ok"] is False
        assert data["error"]["error_type"] == "InvalidArgumentsError"
        assert data["error"]["allowed"] == ["year", "month", "day", "hour", "minute", "second"]

    def test_unknown_function_exits_1(self):
        result = runner.invoke(app, ["call", "time::nope"])
        assert result.exit_code == 1

    def test_wrong_arity_exits_1(self):
        result = runner.invoke(app, ["call", "time::floor", REF])
        assert result.exit_code == 1

    def test_bad_argument_exits_2(self):
        result = runner.invoke(app, ["call", "time::year", "ts:yesterday"])
        assert result.exit_code == 2


class TestEnvironment:
    def test_fixed_now(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "2023-06-15T10:20:30Z")
        result = runner.invoke(app, ["now"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2023-06-15T10:20:30+00:00"

    def test_fixed_now_defaults_extractor(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "2023-06-15T10:20:30Z")
        result = runner.invoke(app, ["call", "time::hour"])
        assert result.stdout.strip() == "10"

    def test_fixed_clock_released_after_command(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "2023-06-15T10:20:30Z")
        runner.invoke(app, ["now"])
        assert isinstance(get_clock(), SystemClock)

    def test_format_pattern(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FORMAT_PATTERN", "%Y/%m/%d")
        result = runner.invoke(app, ["call", "time::floor", REF, HOUR_NANOS])
        assert result.stdout.strip() == "2023/06/15"

    def test_now_json(self, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "1970-01-01T00:00:00Z")
        result = runner.invoke(app, ["now", "--json"])
        assert json.loads(result.stdout) == {
            "type": "Timestamp",
            "value": "1970-01-01T00:00:00+00:00",
            "nanos": 0,
        }


@pytest.fixture
def kolkata_host(monkeypatch):
    """Run with the host zone set to UTC+05:30 (POSIX TZ string, no tzdata needed)."""
    monkeypatch.setenv("TZ", "IST-05:30")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="requires time.tzset")
class TestTimezoneCommand:
    def test_host_offset(self, kolkata_host):
        result = runner.invoke(app, ["call", "time::timezone"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "+05:30"

    def test_fixed_now_keeps_host_offset(self, kolkata_host, monkeypatch):
        monkeypatch.setenv("TEMPUS_FIXED_NOW", "2023-06-15T10:20:30Z")
        result = runner.invoke(app, ["call", "time::timezone"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "+05:30"
