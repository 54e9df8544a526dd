"""Smoke tests for the command-line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from careflow import cli
from careflow.core.types import SlotStatus
from careflow.storage.repository import SQLiteProfileStore


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["careflow", *args])
    monkeypatch.setattr(cli.console.console, "width", 200)
    cli.main()


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    path = str(tmp_path / "careflow.db")
    run_cli(monkeypatch, "seed", "--db", path)
    return path


class TestCLI:
    def test_seed_and_stats(self, db_path: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        run_cli(monkeypatch, "stats", "--db", db_path)
        out = capsys.readouterr().out
        assert "Profile Store Statistics" in out
        assert SQLiteProfileStore(db_path).get_stats()["patients"] == 7

    def test_equity(self, db_path: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        run_cli(monkeypatch, "equity", "PT-1029", "--db", db_path)
        out = capsys.readouterr().out
        assert "Clinical Urgency" in out
        assert "123" in out

    def test_match(self, db_path: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        run_cli(monkeypatch, "match", "PT-1029", "--limit", "1", "--db", db_path)
        assert "demo_appt_1" in capsys.readouterr().out

    def test_find_matches_runs_without_event_loop(
        self, db_path: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(cli.console.console, "width", 200)
        assert cli.find_matches("PT-1029", 1, db_path) is None
        assert "Matches for Ariana Mitchell" in capsys.readouterr().out

    def test_confirm_writes_report(self, db_path: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        html_path = tmp_path / "plan.html"
        run_cli(monkeypatch, "confirm", "PT-1150", "demo_appt_1", "--html", str(html_path), "--db", db_path)
        assert html_path.exists()
        assert SQLiteProfileStore(db_path).get_appointment("demo_appt_1").status == SlotStatus.CONFIRMED

    def test_errors_exit_nonzero(self, db_path: str, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "match", "nobody", "--db", db_path)
        assert exc_info.value.code == 1
        assert "Patient not found" in capsys.readouterr().out

    def test_no_command_prints_help(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch)
        assert exc_info.value.code == 0
