"""Shell command runner.

The runner keeps a single working-directory cursor. Callers that need a
specific directory must ``chdir`` immediately before issuing their command;
no directory scoping is guaranteed between calls.

Commands never raise on a non-zero exit: every call returns a
:class:`CommandResult`. ``check`` is the thin exception-flavoured wrapper.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from demokit.errors import CommandFailedError

logger = logging.getLogger(__name__)

# Conventional shell exit codes for "cannot execute" and "command not found"
EXIT_CANNOT_EXECUTE = 126
EXIT_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured output streams of one command."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner(Protocol):
    """Contract consumed by the git helpers."""

    @property
    def cwd(self) -> Path: ...

    def chdir(self, path: Path | str) -> Path: ...

    def run(self, args: Sequence[str]) -> CommandResult: ...

    async def run_async(self, args: Sequence[str]) -> CommandResult: ...

    def which(self, binary: str) -> str | None: ...


class ShellCommandRunner:
    """Runs commands as subprocesses inside the current working-directory cursor."""

    def __init__(self, cwd: Path | str | None = None) -> None:
        self._cwd = Path(cwd) if cwd is not None else Path.cwd()

    @property
    def cwd(self) -> Path:
        return self._cwd

    def chdir(self, path: Path | str) -> Path:
        """Move the cursor into ``path``.

        Raises:
            FileNotFoundError: ``path`` does not exist.
            NotADirectoryError: ``path`` is not a directory.
            PermissionError: ``path`` cannot be entered.
        """
        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(f"No such directory: {target}")
        if not target.is_dir():
            raise NotADirectoryError(f"Not a directory: {target}")
        if not os.access(target, os.X_OK):
            raise PermissionError(f"Cannot enter directory: {target}")
        self._cwd = target
        logger.debug("cwd -> %s", target)
        return target

    def _missing_cwd(self) -> CommandResult | None:
        if self._cwd.is_dir():
            return None
        logger.debug("cwd %s no longer exists", self._cwd)
        return CommandResult(EXIT_CANNOT_EXECUTE, "", f"working directory does not exist: {self._cwd}")

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run a command to completion and capture its output."""
        logger.debug("exec (cwd=%s): %s", self._cwd, " ".join(args))
        missing = self._missing_cwd()
        if missing is not None:
            return missing
        try:
            completed = subprocess.run(
                list(args),
                cwd=self._cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            return CommandResult(EXIT_COMMAND_NOT_FOUND, "", f"command not found: {exc}")
        result = CommandResult(completed.returncode, completed.stdout, completed.stderr)
        logger.debug("exit %d: %s", result.exit_code, " ".join(args))
        return result

    async def run_async(self, args: Sequence[str]) -> CommandResult:
        """Async variant of :meth:`run`."""
        logger.debug("exec async (cwd=%s): %s", self._cwd, " ".join(args))
        missing = self._missing_cwd()
        if missing is not None:
            return missing
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=self._cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            return CommandResult(EXIT_COMMAND_NOT_FOUND, "", f"command not found: {exc}")
        stdout, stderr = await proc.communicate()
        exit_code = proc.returncode if proc.returncode is not None else -1
        logger.debug("exit %d: %s", exit_code, " ".join(args))
        return CommandResult(exit_code, stdout.decode(errors="replace"), stderr.decode(errors="replace"))

    def which(self, binary: str) -> str | None:
        return shutil.which(binary)


def check(runner: CommandRunner, args: Sequence[str]) -> CommandResult:
    """Run ``args`` and raise :class:`CommandFailedError` on a non-zero exit."""
    result = runner.run(args)
    if not result.ok:
        raise CommandFailedError(args, result.exit_code, result.stderr)
    return result


__all__ = ["CommandResult", "CommandRunner", "ShellCommandRunner", "check"]
