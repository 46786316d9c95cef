# tests/unit/test_cli.py
import pytest
from typer.testing import CliRunner

import config.paths as paths_mod
from apps.tracker_cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _data_root(monkeypatch, tmp_path):
    monkeypatch.setenv("CUCKOO_DATA_ROOT", str(tmp_path / "data"))
    monkeypatch.setenv("CUCKOO_LOGS_ROOT", str(tmp_path / "logs"))
    monkeypatch.delenv("CUCKOO_STORE", raising=False)
    monkeypatch.setattr(paths_mod, "_paths_singleton", None)
    return tmp_path / "data"


def _invoke(*args):
    return runner.invoke(app, list(args))


def test_start_lap_stop_show(_data_root):
    assert _invoke("start", "writing").exit_code == 0
    res = _invoke("lap", "writing")
    assert res.exit_code == 0
    assert "lap 0 started" in res.output
    assert _invoke("stop-lap", "writing", "0").exit_code == 0
    assert _invoke("stop", "writing").exit_code == 0

    res = _invoke("show", "writing")
    assert res.exit_code == 0
    assert "writing: completed" in res.output
    assert "duration: 0:00:" in res.output
    assert "lap 0: inactive" in res.output
    assert (_data_root / "sessions.jsonl").exists()


def test_start_twice_fails(_data_root):
    assert _invoke("start", "writing").exit_code == 0
    res = _invoke("start", "writing")
    assert res.exit_code == 1
    assert "already been started" in res.output


def test_stop_unknown_session_fails(_data_root):
    res = _invoke("stop", "nothing")
    assert res.exit_code == 1
    assert "not been started" in res.output


def test_show_and_remove_unknown_session(_data_root):
    assert _invoke("show", "nothing").exit_code == 1
    assert _invoke("remove", "nothing").exit_code == 1


def test_remove_forgets_session(_data_root):
    _invoke("start", "writing")
    assert _invoke("remove", "writing").exit_code == 0
    assert _invoke("show", "writing").exit_code == 1
    # a removed session can be tracked again from scratch
    assert _invoke("start", "writing").exit_code == 0


def test_show_running_session_has_no_duration(_data_root):
    _invoke("start", "writing")
    res = _invoke("show", "writing")
    assert "writing: running" in res.output
    assert "duration: -" in res.output


def test_stop_lap_at_missing_position_fails_without_writing(_data_root):
    _invoke("start", "writing")
    _invoke("lap", "writing")
    journal = _data_root / "sessions.jsonl"
    before = journal.read_text(encoding="utf-8")

    res = _invoke("stop-lap", "writing", "7")
    assert res.exit_code == 1
    assert "no lap at position 7" in res.output
    assert journal.read_text(encoding="utf-8") == before


def test_unknown_log_level_is_a_usage_error(_data_root):
    res = _invoke("--log-level", "LOUD", "show", "writing")
    assert res.exit_code == 2
    assert "unknown log level: LOUD" in res.output
    assert res.exception is None or isinstance(res.exception, SystemExit)
