"""Smoke tests for the fintrack CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fintrack.cli import app
from fintrack.config import load_settings
from fintrack.store import get_latest_goal, list_transactions

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "data" / "fintrack.db"
    monkeypatch.setenv("FINTRACK_DB", str(path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return path


@pytest.fixture
def initialized(db_path: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return db_path


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, db_path: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert db_path.exists()
        assert (tmp_path / "config" / "fintrack" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "--force" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_shows_defaults(self, db_path: Path) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "default_window_days" in result.output

    def test_sets_window_days(self, db_path: Path) -> None:
        result = runner.invoke(app, ["config", "default_window_days", "7"])

        assert result.exit_code == 0, result.output
        assert load_settings()["default_window_days"] == 7

    def test_shows_single_value(self, db_path: Path) -> None:
        runner.invoke(app, ["config", "currency_symbol", "$"])

        result = runner.invoke(app, ["config", "currency_symbol"])

        assert result.exit_code == 0
        assert "$" in result.output

    def test_rejects_unknown_key(self, db_path: Path) -> None:
        result = runner.invoke(app, ["config", "colour", "blue"])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output

    def test_rejects_zero_window(self, db_path: Path) -> None:
        result = runner.invoke(app, ["config", "default_window_days", "0"])

        assert result.exit_code == 1
        assert load_settings()["default_window_days"] == 30


class TestTransactionCommands:
    """Tests for add, edit, delete and list."""

    def test_add_stores_transaction(self, initialized: Path) -> None:
        result = runner.invoke(app, ["add", "250", "Lunch", "--category", "food", "--payment-mode", "upi"])

        assert result.exit_code == 0, result.output
        transactions = list_transactions(initialized)
        assert len(transactions) == 1
        assert transactions[0].amount == 25000
        assert transactions[0].payment_mode == "upi"
        assert transactions[0].type == "debit"

    def test_add_income_defaults_category(self, initialized: Path) -> None:
        result = runner.invoke(app, ["add", "5000", "Pay", "--type", "credit"])

        assert result.exit_code == 0, result.output
        assert list_transactions(initialized)[0].category == "salary"

    def test_add_rejects_zero_amount(self, initialized: Path) -> None:
        result = runner.invoke(app, ["add", "0", "Nothing"])

        assert result.exit_code == 1
        assert "amount" in result.output
        assert list_transactions(initialized) == []

    def test_add_rejects_huge_amount(self, initialized: Path) -> None:
        result = runner.invoke(app, ["add", "1e20", "Big"])

        assert result.exit_code == 1
        assert "too large" in result.output
        assert list_transactions(initialized) == []

    def test_edit_type_resets_category(self, initialized: Path) -> None:
        runner.invoke(app, ["add", "100", "Refund", "--category", "shopping"])
        txn_id = list_transactions(initialized)[0].id

        result = runner.invoke(app, ["edit", str(txn_id), "--type", "credit"])

        assert result.exit_code == 0, result.output
        txn = list_transactions(initialized)[0]
        assert txn.type == "credit"
        assert txn.category == "salary"
        assert txn.amount == 10000

    def test_edit_unknown_id(self, initialized: Path) -> None:
        result = runner.invoke(app, ["edit", "99", "--amount", "5"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_with_yes(self, initialized: Path) -> None:
        runner.invoke(app, ["add", "100", "Snack"])
        txn_id = list_transactions(initialized)[0].id

        result = runner.invoke(app, ["delete", str(txn_id), "--yes"])

        assert result.exit_code == 0, result.output
        assert list_transactions(initialized) == []

    def test_delete_cancelled(self, initialized: Path) -> None:
        runner.invoke(app, ["add", "100", "Snack"])
        txn_id = list_transactions(initialized)[0].id

        result = runner.invoke(app, ["delete", str(txn_id)], input="n\n")

        assert result.exit_code == 0
        assert len(list_transactions(initialized)) == 1

    def test_list_empty(self, initialized: Path) -> None:
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No transactions found" in result.output


class TestReportCommands:
    """Tests for report, chart and goal."""

    def test_report_with_data(self, initialized: Path) -> None:
        runner.invoke(app, ["add", "250", "Lunch"])
        runner.invoke(app, ["add", "5000", "Pay", "--type", "credit"])

        result = runner.invoke(app, ["report", "--days", "7"])

        assert result.exit_code == 0, result.output
        assert "Report" in result.output

    def test_report_empty(self, initialized: Path) -> None:
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        assert "No expenses in this period" in result.output

    def test_report_without_database_fails(self, db_path: Path) -> None:
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 1
        assert "Database error" in result.output

    def test_chart_kinds(self, initialized: Path) -> None:
        runner.invoke(app, ["add", "250", "Lunch"])

        for kind in ("daily", "category", "monthly"):
            result = runner.invoke(app, ["chart", kind])
            assert result.exit_code == 0, result.output

    def test_chart_unknown_kind(self, initialized: Path) -> None:
        result = runner.invoke(app, ["chart", "pie"])

        assert result.exit_code == 1

    def test_goal_replaces_previous(self, initialized: Path) -> None:
        runner.invoke(app, ["goal", "--set", "1000", "--start", "2025-01-01"])
        result = runner.invoke(app, ["goal", "--set", "2500", "--start", "2025-02-01"])

        assert result.exit_code == 0, result.output
        goal = get_latest_goal(initialized)
        assert goal is not None
        assert goal.bank_amount == 250000
        assert "2,500.00" in result.output

    def test_goal_rejects_zero(self, initialized: Path) -> None:
        result = runner.invoke(app, ["goal", "--set", "0"])

        assert result.exit_code == 1
        assert get_latest_goal(initialized) is None

    def test_goal_not_set(self, initialized: Path) -> None:
        result = runner.invoke(app, ["goal"])

        assert result.exit_code == 0
        assert "No goal set" in result.output


class TestPeriodLabel:
    """Tests for the report heading label."""

    def test_preset_period(self) -> None:
        from fintrack.commands.report import period_label

        assert period_label(90) == "3 Months"

    def test_custom_period(self) -> None:
        from fintrack.commands.report import period_label

        assert period_label(12) == "last 12 days"
