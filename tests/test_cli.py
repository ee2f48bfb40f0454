"""
Tests for the command-line front end.
"""

import json

import pytest

from fincalc import cli
from fincalc.cli import PLACEHOLDER, build_parser, main


def _reject_constant(token):
    raise ValueError(f"non-standard JSON constant {token}")


def strict_json(text):
    """Parse output as standard JSON, refusing NaN and Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


class TestReports:
    """Test plain-text reports."""

    def test_lumpsum_report(self, capsys):
        code = main(["lumpsum", "--amount", "10000", "--duration", "5", "--return", "10"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Lumpsum Calculator" in out
        assert "₹16,105.10" in out
        assert "Breakdown" in out
        assert "Invested" in out

    def test_goal_report_names_frequency(self, capsys):
        code = main(
            [
                "goal", "--goal", "1000000", "--frequency", "quarterly",
                "--duration", "10", "--return", "12", "--inflation", "6",
            ]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "Required Quarterly SIP" in out
        assert "Returns" in out

    def test_multiplier_time_report(self, capsys):
        code = main(
            ["multiplier", "--principal", "10000", "--return", "10", "--multiplier", "2"]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "7.27 years" in out

    def test_inflation_loss_line(self, capsys):
        main(["inflation", "--amount", "10000", "--rate", "5", "--duration", "10"])
        out = capsys.readouterr().out
        assert "₹6,139.13" in out
        assert "Purchasing Power Loss" in out
        assert "38.61%" in out

    def test_currency_from_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("CURRENCY_SYMBOL", "$")
        main(["lumpsum", "--amount", "10000", "--duration", "5", "--return", "10"])
        assert "$16,105.10" in capsys.readouterr().out


class TestNoResult:
    """Test the placeholder path."""

    def test_invalid_amount(self, capsys):
        code = main(["sip", "--amount", "0", "--duration", "5", "--return", "10"])
        captured = capsys.readouterr()
        assert code == 1
        assert PLACEHOLDER in captured.out
        assert "positive" in captured.err

    def test_unparsable_number(self, capsys):
        code = main(["cagr", "--initial", "abc", "--final", "15000", "--duration", "5"])
        assert code == 1

    def test_json_no_result(self, capsys):
        code = main(["lumpsum", "--json"])
        payload = strict_json(capsys.readouterr().out)
        assert code == 1
        assert payload["result"] is None
        assert payload["inputs"]["principal"] is None


class TestOptions:
    """Test --query, --json and --share."""

    def test_json_output(self, capsys):
        code = main(["cagr", "--initial", "10000", "--final", "15000", "--duration", "5", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert code == 0
        assert payload["calculator"] == "cagr"
        assert abs(payload["result"]["cagr"] - 8.447) < 0.001
        assert len(payload["result"]["breakdown"]) == 2

    def test_json_multiplier_time_mode(self, capsys):
        """Test the unused multiplier-mode field is written as null."""
        code = main(
            [
                "multiplier", "--mode", "time", "--principal", "10000",
                "--return", "10", "--multiplier", "2", "--json",
            ]
        )
        payload = strict_json(capsys.readouterr().out)
        assert code == 0
        assert payload["inputs"]["final"] is None
        assert payload["result"]["multiplier"] is None
        assert abs(payload["result"]["years"] - 7.27) < 0.01

    def test_query_with_flag_override(self, capsys):
        code = main(
            [
                "sip", "--query", "amount=5000&duration=5&return=10&frequency=daily",
                "--return", "0", "--json",
            ]
        )
        payload = json.loads(capsys.readouterr().out)
        assert code == 0
        assert payload["inputs"]["frequency"] == "monthly"
        assert payload["result"]["future_value"] == 300000

    def test_step_up_flags(self, capsys):
        code = main(
            [
                "sip", "--amount", "100", "--frequency", "yearly", "--duration", "3",
                "--return", "0", "--stepup", "--stepup-frequency", "yearly",
                "--stepup-percent", "10", "--json",
            ]
        )
        payload = json.loads(capsys.readouterr().out)
        assert code == 0
        assert abs(payload["result"]["invested"] - 331) < 1e-9

    def test_share_link(self, capsys):
        main(["lumpsum", "--amount", "10000", "--duration", "5", "--return", "10", "--share"])
        out = capsys.readouterr().out
        assert "Share: https://finance.zytact.com/lumpsum?amount=10000&duration=5&return=10" in out

    def test_unknown_choice_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["sip", "--frequency", "daily"])
        assert exc_info.value.code == 2

    def test_calculator_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2


class TestSettings:
    """Test settings that shape the front end."""

    def test_app_name_in_help(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "Household Planner")
        assert build_parser().description == "Household Planner"

    def test_debug_enables_debug_logging(self, capsys, monkeypatch):
        """Test DEBUG=true logs at DEBUG without --verbose."""
        levels = []
        monkeypatch.setattr(cli, "configure_logging", levels.append)
        monkeypatch.setenv("DEBUG", "true")
        main(["lumpsum", "--amount", "10000", "--duration", "5", "--return", "10"])
        assert levels == ["DEBUG"]

    def test_log_level_setting(self, capsys, monkeypatch):
        levels = []
        monkeypatch.setattr(cli, "configure_logging", levels.append)
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        main(["lumpsum", "--amount", "10000", "--duration", "5", "--return", "10"])
        assert levels == ["WARNING"]
