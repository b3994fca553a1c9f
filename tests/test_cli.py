"""CLI integration tests.

Each test runs against a fresh database and config under tmp_path.
"""

import json
from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from finwatch.cli import app
from finwatch.config import save_config

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path


@pytest.fixture
def initialized(isolated_home: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    return isolated_home


def invoke_json(args: list[str]) -> object:
    result = runner.invoke(app, args + ["--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def category_id(name: str) -> int:
    categories = invoke_json(["category", "list"])
    return next(c["id"] for c in categories if c["name"] == name)  # type: ignore[union-attr, index]


class TestInit:
    """Tests for finwatch init."""

    def test_creates_database_and_config(self, isolated_home: Path) -> None:
        """Should create both files and seed categories."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Seeded 16 default categories" in result.stdout
        assert (isolated_home / "data" / "finwatch" / "finwatch.db").exists()
        assert (isolated_home / "config" / "finwatch" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should exit 1 when already initialized without --force."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "--force" in result.stdout

    def test_migrate_keeps_categories(self, initialized: Path) -> None:
        """Should not seed defaults twice."""
        result = runner.invoke(app, ["init", "--migrate"])

        assert result.exit_code == 0
        assert "already present" in result.stdout
        assert len(invoke_json(["category", "list"])) == 16  # type: ignore[arg-type]

    def test_commands_need_database(self) -> None:
        """Should exit 1 before init."""
        result = runner.invoke(app, ["budget", "list"])

        assert result.exit_code == 1
        assert "finwatch init" in result.stdout


class TestConfigErrors:
    """Tests for a broken config file."""

    @pytest.mark.parametrize(
        ("config", "detail"),
        [
            ({"min_year": 2050, "max_year": 2040}, "min_year"),
            ({"logging": {"level": "LOUD"}}, "LOUD"),
        ],
    )
    def test_exits_with_message(self, initialized: Path, config: dict[str, object], detail: str) -> None:
        """Should print the problem and exit 1 instead of a traceback."""
        save_config(config, initialized / "config" / "finwatch" / "config.toml")

        result = runner.invoke(app, ["budget", "list"])

        assert result.exit_code == 1
        assert "Invalid config" in result.stdout
        assert detail in result.stdout


class TestBudgetCommands:
    """Tests for the budget sub-commands."""

    def test_create_and_show(self, initialized: Path) -> None:
        """Should evaluate a budget against the month's expenses."""
        food = category_id("Food & Dining")
        for day, amount in [("2025-10-03", "1000.00"), ("2025-10-11", "800.00"), ("2025-10-19", "500.00")]:
            result = runner.invoke(app, ["txn", "add", day, str(food), amount])
            assert result.exit_code == 0, result.output

        created = invoke_json(["budget", "create", str(food), "3000.00", "--month", "2025-10"])
        shown = invoke_json(["budget", "show", str(created["id"])])  # type: ignore[index]

        assert shown == created
        assert shown["currentSpending"] == "2300.00"  # type: ignore[index]
        assert shown["percentageUsed"] == 76.67  # type: ignore[index]
        assert shown["remaining"] == "700.00"  # type: ignore[index]
        assert shown["isExceeded"] is False  # type: ignore[index]

    def test_duplicate_rejected(self, initialized: Path) -> None:
        """Should exit 1 with a duplicate message."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["budget", "create", str(food), "3000", "--month", "2025-10"])

        result = runner.invoke(app, ["budget", "create", str(food), "100", "--month", "2025-10"])

        assert result.exit_code == 1
        assert "Budget already exists" in result.stdout

    def test_other_user_cannot_see_budget(self, initialized: Path) -> None:
        """Should refuse another user's budget."""
        food = category_id("Food & Dining")
        created = invoke_json(["budget", "create", str(food), "3000", "--month", "2025-10"])

        result = runner.invoke(app, ["budget", "show", str(created["id"]), "--user", "2"])  # type: ignore[index]

        assert result.exit_code == 1

    def test_update_limit_only(self, initialized: Path) -> None:
        """Should keep category and month when only the limit changes."""
        food = category_id("Food & Dining")
        created = invoke_json(["budget", "create", str(food), "3000", "--month", "2025-10"])

        updated = invoke_json(["budget", "update", str(created["id"]), "--limit", "3500"])  # type: ignore[index]

        assert updated["limitAmount"] == "3500.00"  # type: ignore[index]
        assert (updated["month"], updated["year"]) == (10, 2025)  # type: ignore[index]

    def test_invalid_limit(self, initialized: Path) -> None:
        """Should exit 1 for a zero limit."""
        food = category_id("Food & Dining")
        result = runner.invoke(app, ["budget", "create", str(food), "0", "--month", "2025-10"])

        assert result.exit_code == 1
        assert "Limit amount must be greater than 0" in result.stdout

    def test_delete(self, initialized: Path) -> None:
        """Should remove the budget from the month's list."""
        food = category_id("Food & Dining")
        created = invoke_json(["budget", "create", str(food), "3000", "--month", "2025-10"])

        result = runner.invoke(app, ["budget", "delete", str(created["id"])])  # type: ignore[index]

        assert result.exit_code == 0
        assert invoke_json(["budget", "list", "--month", "2025-10"]) == []

    def test_alerts_for_current_month(self, initialized: Path) -> None:
        """Should report an overspent budget as DANGER."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["txn", "add", date.today().isoformat(), str(food), "3100.00"])
        runner.invoke(app, ["budget", "create", str(food), "3000.00"])

        alerts = invoke_json(["budget", "alerts"])

        assert len(alerts) == 1  # type: ignore[arg-type]
        assert alerts[0]["alertLevel"] == "DANGER"  # type: ignore[index]
        assert alerts[0]["message"] == "Budget exceeded by 3.33%"  # type: ignore[index]
        assert alerts[0]["forecast"]["willExceed"] is True  # type: ignore[index]


class TestCategoryAndTransactionCommands:
    """Tests for category and txn sub-commands."""

    def test_add_private_category(self, initialized: Path) -> None:
        """Should show the new category only to its owner."""
        result = runner.invoke(app, ["category", "add", "Coffee"])
        assert result.exit_code == 0

        assert "Coffee" in [c["name"] for c in invoke_json(["category", "list"])]  # type: ignore[union-attr, index]
        assert "Coffee" not in [
            c["name"] for c in invoke_json(["category", "list", "--user", "2"])  # type: ignore[union-attr, index]
        ]

    def test_txn_list_and_delete(self, initialized: Path) -> None:
        """Should list a month's transactions and delete one."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["txn", "add", "03/10/2025", str(food), "12.50", "-d", "Lunch"])

        listed = invoke_json(["txn", "list", "--month", "2025-10"])
        assert [t["transactionDate"] for t in listed] == ["2025-10-03"]  # type: ignore[union-attr, index]

        result = runner.invoke(app, ["txn", "delete", str(listed[0]["id"])])  # type: ignore[index]
        assert result.exit_code == 0
        assert invoke_json(["txn", "list", "--month", "2025-10"]) == []

    def test_txn_rejects_bad_amount(self, initialized: Path) -> None:
        """Should exit 1 for an amount with sub-cent precision."""
        food = category_id("Food & Dining")
        result = runner.invoke(app, ["txn", "add", "2025-10-03", str(food), "1.005"])

        assert result.exit_code == 1

    def test_txn_show(self, initialized: Path) -> None:
        """Should show one transaction with its category name."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["txn", "add", "2025-10-03", str(food), "12.50", "-d", "Lunch"])
        listed = invoke_json(["txn", "list", "--month", "2025-10"])

        shown = invoke_json(["txn", "show", str(listed[0]["id"])])  # type: ignore[index]

        assert shown == listed[0]  # type: ignore[index]
        assert shown["categoryName"] == "Food & Dining"  # type: ignore[index]
        assert shown["description"] == "Lunch"  # type: ignore[index]

    def test_txn_show_other_user(self, initialized: Path) -> None:
        """Should exit 1 for another user's transaction."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["txn", "add", "2025-10-03", str(food), "12.50"])
        listed = invoke_json(["txn", "list", "--month", "2025-10"])

        result = runner.invoke(app, ["txn", "show", str(listed[0]["id"]), "--user", "2"])  # type: ignore[index]

        assert result.exit_code == 1

    def test_txn_update_changes_budget_spending(self, initialized: Path) -> None:
        """Should re-evaluate the budget from the updated transaction."""
        food = category_id("Food & Dining")
        transport = category_id("Transportation")
        runner.invoke(app, ["txn", "add", "2025-10-03", str(food), "2300.00"])
        created = invoke_json(["budget", "create", str(food), "3000.00", "--month", "2025-10"])
        txn_id = str(invoke_json(["txn", "list", "--month", "2025-10"])[0]["id"])  # type: ignore[index]

        updated = invoke_json(["txn", "update", txn_id, "--amount", "2700.00"])
        budget = invoke_json(["budget", "show", str(created["id"])])  # type: ignore[index]

        assert updated["amount"] == "2700.00"  # type: ignore[index]
        assert updated["transactionDate"] == "2025-10-03"  # type: ignore[index]
        assert budget["currentSpending"] == "2700.00"  # type: ignore[index]
        assert budget["percentageUsed"] == 90.0  # type: ignore[index]

        invoke_json(["txn", "update", txn_id, "--category", str(transport)])
        budget = invoke_json(["budget", "show", str(created["id"])])  # type: ignore[index]

        assert budget["currentSpending"] == "0.00"  # type: ignore[index]

    def test_txn_update_rejects_bad_amount(self, initialized: Path) -> None:
        """Should exit 1 and leave the transaction alone."""
        food = category_id("Food & Dining")
        runner.invoke(app, ["txn", "add", "2025-10-03", str(food), "12.50"])
        txn_id = str(invoke_json(["txn", "list", "--month", "2025-10"])[0]["id"])  # type: ignore[index]

        result = runner.invoke(app, ["txn", "update", txn_id, "--amount", "0"])

        assert result.exit_code == 1
        assert invoke_json(["txn", "show", txn_id])["amount"] == "12.50"  # type: ignore[index]
