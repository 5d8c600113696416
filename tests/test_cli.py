"""Tests for the pwcycle command line."""

import json

import pytest
from click.testing import CliRunner

from pwcycle.cli import main as cli_main
from tests.helpers import FakeEngine


@pytest.fixture
def runner():
    return CliRunner()


class _Engines(list):
    """Engines created by the patched factory; ``visible`` is shared with each."""


@pytest.fixture
def fake_engines(monkeypatch):
    created = _Engines()
    created.visible = {}

    def factory(name, wait_timeout_ms):
        engine = FakeEngine(visible=created.visible)
        created.append(engine)
        return engine

    monkeypatch.setattr(cli_main, "create_engine", factory)
    return created


@pytest.mark.unit
def test_check_fixtures(runner, data_dir):
    result = runner.invoke(cli_main.cli, ["check-fixtures", "--data-dir", str(data_dir)])

    assert result.exit_code == 0, result.output
    assert "2 usernames" in result.output


@pytest.mark.unit
def test_missing_fixture_fails_before_browser(runner, data_dir, fake_engines):
    (data_dir / "password.txt").unlink()

    result = runner.invoke(cli_main.cli, ["run", "--data-dir", str(data_dir)])

    assert result.exit_code == 1
    assert "Secret file not found" in result.output
    assert fake_engines == []


@pytest.mark.unit
def test_run_passes_and_writes_report(runner, data_dir, tmp_path, fake_engines):
    report = tmp_path / "out" / "report.json"

    result = runner.invoke(cli_main.cli, [
        "run", "--data-dir", str(data_dir), "--base-url", "https://login.example.com",
        "--report", str(report),
    ])

    assert result.exit_code == 0, result.output
    assert len(fake_engines) == 1
    engine = fake_engines[0]
    assert engine.calls[0] == ("start", True)
    assert engine.calls[-1] == ("stop",)

    data = json.loads(report.read_text())
    assert data["summary"] == {"passed": 2, "failed": 0, "skipped": 0}
    assert [o["username"] for o in data["outcomes"]] == ["a@x.com", "b@x.com"]
    assert "P0" not in report.read_text()


@pytest.mark.unit
def test_run_failure_exits_nonzero(runner, data_dir, fake_engines, site):
    fake_engines.visible[site.user_nav_button] = False

    result = runner.invoke(cli_main.cli, ["run", "--data-dir", str(data_dir), "--on-failure", "abort"])

    assert result.exit_code == 1
    assert fake_engines[0].calls[-1] == ("stop",)
    assert "1 failed" in result.output
    assert "1 skipped" in result.output


@pytest.mark.unit
def test_dry_run_does_not_start_a_browser(runner, data_dir, fake_engines):
    result = runner.invoke(cli_main.cli, ["run", "--data-dir", str(data_dir), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert fake_engines == []
    assert "dry-run" in result.output


@pytest.mark.unit
def test_bad_config_value(runner, data_dir):
    result = runner.invoke(cli_main.cli, ["run", "--data-dir", str(data_dir), "--timeout-ms", "0"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
