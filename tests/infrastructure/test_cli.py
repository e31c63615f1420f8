"""End-to-end smoke test of the click CLI against a temporary data dir."""

import json

import pytest
from click.testing import CliRunner

from agrotic.config import settings
from agrotic.infrastructure.cli import main


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
    return CliRunner()


def _invoke(runner, *args):
    result = runner.invoke(main.cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


def test_reserve_then_remove_activity_returns_stock(runner):
    out = _invoke(runner, "product", "add", "--name", "Urea", "--price", "100", "--capacity", "10")
    assert "Product #1 'Urea'" in out

    out = _invoke(runner, "lot", "create", "--product", "1", "--stock", "10")
    assert "100.00 units available" in out

    _invoke(runner, "activity", "create", "--description", "Fertilize", "--crop-zone", "z1",
            "--category", "c1", "--date", "2024-03-01", "--responsible", "1001")

    out = _invoke(runner, "reservation", "reserve-product", "--activity", "1",
                  "--product", "1", "--quantity", "30")
    assert "30.00 of Urea from lot #1" in out

    out = _invoke(runner, "activity", "remove", "--id", "1")
    assert "1 reservations returned to stock" in out

    lots = json.loads((settings.data_dir / "lots.json").read_text(encoding="utf-8"))
    assert lots[0]["partial_quantity"] == "30.00"


def test_domain_errors_become_click_errors(runner):
    result = runner.invoke(main.cli, ["lot", "remove", "--id", "9"])

    assert result.exit_code == 1
    assert "Lot 9 not found" in result.output


def test_cost_report(runner):
    _invoke(runner, "product", "add", "--name", "Urea", "--price", "100", "--capacity", "10")
    _invoke(runner, "lot", "create", "--product", "1", "--stock", "10")
    _invoke(runner, "activity", "create", "--description", "Fertilize", "--crop-zone", "z1",
            "--category", "c1", "--date", "2024-03-01", "--responsible", "1001")
    _invoke(runner, "reservation", "reserve", "--activity", "1", "--lot", "1", "--quantity", "3")
    _invoke(runner, "reservation", "confirm", "--id", "1", "--used", "3")
    _invoke(runner, "activity", "finalize", "--id", "1", "--by", "1001",
            "--hours", "2", "--rate", "10")

    out = _invoke(runner, "activity", "cost", "--id", "1")

    assert "30.00" in out
    assert "50.00" in out


def test_over_use_policy_comes_from_settings(runner, monkeypatch):
    _invoke(runner, "product", "add", "--name", "Urea", "--price", "100", "--capacity", "10")
    _invoke(runner, "lot", "create", "--product", "1", "--stock", "10")
    _invoke(runner, "activity", "create", "--description", "Fertilize", "--crop-zone", "z1",
            "--category", "c1", "--date", "2024-03-01", "--responsible", "1001")
    _invoke(runner, "reservation", "reserve", "--activity", "1", "--lot", "1", "--quantity", "3")
    monkeypatch.setattr(settings, "reject_over_use", True)

    result = runner.invoke(main.cli, ["reservation", "confirm", "--id", "1", "--used", "4"])

    assert result.exit_code != 0
    assert "exceeds" in result.output
