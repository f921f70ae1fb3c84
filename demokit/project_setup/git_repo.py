"""Local Git working copy provisioning: clone, init, commit, add remote."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from demokit.errors import DestinationNotEmptyError, InvalidTargetDirError, NoTargetDirError
from demokit.runtime.shell import CommandRunner, ShellCommandRunner, check

logger = logging.getLogger(__name__)


def _require_str(name: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TypeError(f"ERROR_INVALID_TYPE: Expected non-empty string for {name} but got {value!r}")
    return value


def _resolve_dir(target_directory: str) -> Path:
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(target_directory))))


class LocalRepositoryProvisioner:
    """Runs the git commands needed to set up a single local working copy.

    All commands go through one runner whose working directory is moved
    into the target immediately before each command.
    """

    def __init__(self, runner: Optional[CommandRunner] = None, *, git_binary: str = "git") -> None:
        self._runner: CommandRunner = runner or ShellCommandRunner()
        self._git = git_binary

    def _enter(self, target: Path) -> None:
        try:
            self._runner.chdir(target)
        except OSError as exc:
            raise NoTargetDirError(target, f"Cannot change into {target}: {exc}") from exc

    def _enter_or_create(self, target: Path) -> None:
        """Change into ``target``, creating it once if the first attempt fails."""
        try:
            self._runner.chdir(target)
            return
        except OSError as exc:
            logger.debug("Target directory %s not usable (%s); creating it", target, exc)

        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InvalidTargetDirError(target) from exc

        try:
            self._runner.chdir(target)
        except OSError as exc:
            raise NoTargetDirError(target) from exc

    def clone(self, remote_uri: str, target_directory: str = ".") -> Path:
        """Clone ``remote_uri`` inside ``target_directory``, creating the directory if needed.

        Returns:
            The resolved target directory.

        Raises:
            TypeError: A parameter is not a non-empty string.
            InvalidTargetDirError: The target directory could not be created.
            NoTargetDirError: The target directory was created but cannot be entered.
            DestinationNotEmptyError: ``git clone`` failed, most often because the
                destination already exists and is not empty.
        """
        _require_str("remote_uri", remote_uri)
        _require_str("target_directory", target_directory)
        target = _resolve_dir(target_directory)
        logger.debug("clone %s into %s", remote_uri, target)

        self._enter_or_create(target)
        result = self._runner.run([self._git, "clone", remote_uri])
        if not result.ok:
            logger.debug("git clone failed (exit %d): %s", result.exit_code, result.stderr.strip())
            raise DestinationNotEmptyError(target)

        logger.info("Cloned %s into %s", remote_uri, target)
        return target

    def init(self, target_directory: str) -> None:
        """Initialize a repository. Safe to repeat on the same location."""
        _require_str("target_directory", target_directory)
        self._enter(_resolve_dir(target_directory))
        check(self._runner, [self._git, "init"])

    def add_and_commit(self, target_directory: str, message: str) -> None:
        """Stage every change and commit it with ``message``."""
        _require_str("target_directory", target_directory)
        _require_str("message", message)
        self._enter(_resolve_dir(target_directory))
        check(self._runner, [self._git, "add", "-A"])
        check(self._runner, [self._git, "commit", "-m", message])

    def add_remote_origin(self, target_directory: str, remote_uri: str) -> None:
        _require_str("target_directory", target_directory)
        _require_str("remote_uri", remote_uri)
        self._enter(_resolve_dir(target_directory))
        check(self._runner, [self._git, "remote", "add", "origin", remote_uri])


__all__ = ["LocalRepositoryProvisioner"]
