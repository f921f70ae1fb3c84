"""Tests for the subprocess runner."""

from __future__ import annotations

import pytest

from demokit.errors import CommandFailedError
from demokit.runtime.shell import CommandResult, ShellCommandRunner, check


def test_chdir_moves_cursor(tmp_path):
    runner = ShellCommandRunner()
    assert runner.chdir(tmp_path) == tmp_path
    assert runner.cwd == tmp_path


def test_chdir_missing_directory(tmp_path):
    runner = ShellCommandRunner(tmp_path)
    with pytest.raises(FileNotFoundError):
        runner.chdir(tmp_path / "missing")
    assert runner.cwd == tmp_path


def test_chdir_into_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        ShellCommandRunner(tmp_path).chdir(file_path)


@pytest.mark.integration
def test_run_captures_exit_code_and_streams(tmp_path):
    result = ShellCommandRunner(tmp_path).run(["sh", "-c", "pwd; echo oops >&2; exit 3"])

    assert result.exit_code == 3
    assert result.stdout.strip() == str(tmp_path)
    assert result.stderr.strip() == "oops"
    assert result.ok is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_run_async_captures_exit_code_and_streams(tmp_path):
    result = await ShellCommandRunner(tmp_path).run_async(["sh", "-c", "echo hi; exit 2"])

    assert result == CommandResult(2, "hi\n", "")


def test_missing_binary_is_reported_not_raised(tmp_path):
    result = ShellCommandRunner(tmp_path).run(["definitely-not-a-real-binary-xyz"])

    assert result.exit_code == 127
    assert result.ok is False
    assert result.stderr.startswith("command not found: ")


@pytest.mark.asyncio
async def test_missing_binary_is_reported_not_raised_async(tmp_path):
    result = await ShellCommandRunner(tmp_path).run_async(["definitely-not-a-real-binary-xyz"])

    assert result.exit_code == 127


def test_check_raises_on_failure(fake_runner):
    fake_runner.exit_codes["push"] = 1

    with pytest.raises(CommandFailedError, match=r"^ERROR_COMMAND_FAILED: `git push` exited with code 1"):
        check(fake_runner, ["git", "push"])
    assert check(fake_runner, ["git", "status"]).ok


def test_vanished_working_directory_is_not_reported_as_missing_binary(tmp_path):
    workdir = tmp_path / "gone"
    workdir.mkdir()
    runner = ShellCommandRunner(workdir)
    workdir.rmdir()

    result = runner.run(["git", "status"])

    assert result.exit_code == 126
    assert result.stderr == f"working directory does not exist: {workdir}"


@pytest.mark.asyncio
async def test_vanished_working_directory_async(tmp_path):
    workdir = tmp_path / "gone"
    workdir.mkdir()
    runner = ShellCommandRunner(workdir)
    workdir.rmdir()

    result = await runner.run_async(["git", "status"])

    assert result.exit_code == 126
    assert "working directory does not exist" in result.stderr
