"""Tests for devtools entrypoints."""

from types import SimpleNamespace

import pytest

from phira_client import devtools


def _capture_run(monkeypatch: pytest.MonkeyPatch, returncode: int = 0) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run(args: list[str], check: bool = False) -> SimpleNamespace:
        calls.append(list(args))
        return SimpleNamespace(returncode=returncode)

    monkeypatch.setattr(devtools.subprocess, "run", fake_run)
    return calls


def test_lint_calls_ruff(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch)
    monkeypatch.setattr(devtools.sys, "argv", ["devtools", "--select", "E"])

    with pytest.raises(SystemExit) as exc_info:
        devtools.lint()

    assert exc_info.value.code == 0
    assert calls == [["ruff", "check", "src", "tests", "--select", "E"]]


def test_test_passes_through_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch)
    monkeypatch.setattr(devtools.sys, "argv", ["devtools", "-k", "cache"])

    with pytest.raises(SystemExit):
        devtools.test()

    assert calls == [["pytest", "-k", "cache"]]


def test_coverage_targets_package(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch)
    monkeypatch.setattr(devtools.sys, "argv", ["devtools"])

    with pytest.raises(SystemExit):
        devtools.coverage()

    assert "--cov=phira_client" in calls[0]


def test_check_runs_every_step(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        devtools.check()

    assert exc_info.value.code == 0
    assert [call[0] for call in calls] == ["ruff", "pyright", "ruff", "pytest"]


def test_check_stops_on_first_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch, returncode=3)

    with pytest.raises(SystemExit) as exc_info:
        devtools.check()

    assert exc_info.value.code == 3
    assert len(calls) == 1


def test_typecheck_exits_with_pyright_status(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = _capture_run(monkeypatch, returncode=3)
    monkeypatch.setattr(devtools.sys, "argv", ["devtools", "--verbose"])

    with pytest.raises(SystemExit) as exc_info:
        devtools.typecheck()

    assert exc_info.value.code == 3
    assert calls == [["pyright", "--verbose"]]
