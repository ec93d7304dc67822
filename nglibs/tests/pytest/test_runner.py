"""
Tests for batch execution of external commands.

These run real ``sh`` processes with trivial commands.
"""

from __future__ import annotations

import subprocess

import pytest

from nglibs.build import runner
from nglibs.build.commands import Command, command
from nglibs.build.runner import BatchResult, CommandResult, run_concurrent, run_sequential


def sh(script: str, label: str = "") -> Command:
    return command("sh", "-c", script).with_label(label)


@pytest.mark.evergreen
class TestRunSequential:
    """A failing command is reported and the batch continues."""

    def test_failure_does_not_stop_batch(self, capfd: pytest.CaptureFixture[str]) -> None:
        batch = run_sequential([sh("exit 3", "first"), sh("echo second")])

        assert [r.returncode for r in batch.results] == [3, 0]
        assert not batch.ok
        assert batch.failed[0].label == "first"

        out = capfd.readouterr().out
        assert "Exit code: 3 (first)" in out
        assert "second" in out

    def test_stdout_streams_in_order(self, capfd: pytest.CaptureFixture[str]) -> None:
        """Child output reaches the terminal between the surrounding log lines."""
        run_sequential([sh("echo from-first", "first"), sh("exit 4", "second")])

        out = capfd.readouterr().out
        assert out.index("from-first") < out.index("Exit code: 4 (second)")

    def test_stderr_captured_on_failure(self) -> None:
        batch = run_sequential([sh("echo boom >&2; exit 1")])

        result = batch.results[0]
        assert result.stderr.strip() == "boom"
        assert "boom" in str(result.failure())

    def test_preconditions_gate_command(self, tmp_path) -> None:
        marker = tmp_path / "ran"
        cmd = command("touch", marker).after(sh("exit 1"))

        batch = run_sequential([cmd])

        assert not batch.ok
        assert not marker.exists()

    def test_dry_run_executes_nothing(self, tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
        marker = tmp_path / "ran"

        batch = run_sequential([command("touch", marker)], dry_run=True)

        assert batch.ok
        assert not marker.exists()
        assert f"[DRY-RUN] Would run: touch {marker}" in capsys.readouterr().out


@pytest.mark.evergreen
class TestRunConcurrent:
    """All commands start together; the batch waits for every one."""

    def test_waits_for_all(self, tmp_path) -> None:
        first, second = tmp_path / "a", tmp_path / "b"

        batch = run_concurrent([command("touch", first), command("touch", second)])

        assert batch.ok
        assert first.exists() and second.exists()

    def test_reports_failures(self, capsys: pytest.CaptureFixture[str]) -> None:
        batch = run_concurrent([sh("exit 0"), sh("exit 2", "bad")])

        assert [r.returncode for r in batch.results] == [0, 2]
        assert "1 of 2 commands failed" in capsys.readouterr().out

    def test_spawn_failure_stops_started_children(self, monkeypatch: pytest.MonkeyPatch) -> None:
        started: list[subprocess.Popen] = []
        real_spawn = runner.spawn_shell

        def spawn(line: str) -> subprocess.Popen:
            if started:
                raise OSError("cannot fork")
            proc = real_spawn(line)
            started.append(proc)
            return proc

        monkeypatch.setattr(runner, "spawn_shell", spawn)

        with pytest.raises(OSError):
            run_concurrent([command("sleep", "30"), sh("true")])

        assert len(started) == 1
        assert started[0].returncode is not None

    def test_dry_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        batch = run_concurrent([sh("exit 1")], dry_run=True)

        assert batch.ok
        assert "[DRY-RUN] Would run:" in capsys.readouterr().out


@pytest.mark.evergreen
class TestBatchResult:
    def test_extend(self) -> None:
        batch = BatchResult([CommandResult("a", 0)])
        batch.extend(BatchResult([CommandResult("b", 1)]))

        assert [r.command for r in batch.results] == ["a", "b"]
        assert [r.command for r in batch.failed] == ["b"]
