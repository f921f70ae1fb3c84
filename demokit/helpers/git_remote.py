"""Remote repository state classification and Git URI helpers.

``git ls-remote --exit-code -h <uri>`` exit codes map to a verdict:

    0    remote exists and has at least one commit
    2    remote exists but has no commits
    128  remote does not exist or is not accessible
    *    unexpected; surfaced as INDETERMINATE, never retried

The async :meth:`RemoteRepositoryStateClassifier.classify` distinguishes all
four. The blocking checks only report whether the probe succeeded, so they
cannot tell an empty remote from a missing one.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from demokit.constants import PROBE_EXIT_EMPTY, PROBE_EXIT_HAS_HISTORY, PROBE_EXIT_NOT_FOUND
from demokit.errors import CommandFailedError, IndeterminateError, UnreadableRepoNameError
from demokit.runtime.shell import CommandResult, CommandRunner, ShellCommandRunner, check

logger = logging.getLogger(__name__)

_REPO_NAME_RE = re.compile(r"/[\w-]+\.git/*$", re.ASCII)
_GIT_URI_RE = re.compile(r"(^(git|ssh|https?)|(git@[\w.]+))(:(//)?)([\w.@:/\-~]+)(\.git)(/)?$")


class RemoteState(str, Enum):
    REACHABLE_WITH_HISTORY = "reachable_with_history"
    REACHABLE_EMPTY = "reachable_empty"
    UNREACHABLE = "unreachable"
    INDETERMINATE = "indeterminate"


_EXIT_CODE_STATES: dict[int, tuple[RemoteState, str]] = {
    PROBE_EXIT_HAS_HISTORY: (RemoteState.REACHABLE_WITH_HISTORY, "Remote repository found"),
    PROBE_EXIT_EMPTY: (RemoteState.REACHABLE_EMPTY, "Remote repository contains no commits"),
    PROBE_EXIT_NOT_FOUND: (RemoteState.UNREACHABLE, "Remote repository not found"),
}


@dataclass(frozen=True)
class RemoteRepositoryVerdict:
    """Result of one remote probe."""

    remote_uri: str
    state: RemoteState
    exit_code: int
    stdout: str
    stderr: str
    message: str

    @property
    def has_history(self) -> bool:
        return self.state is RemoteState.REACHABLE_WITH_HISTORY

    @property
    def is_indeterminate(self) -> bool:
        return self.state is RemoteState.INDETERMINATE

    def raise_if_indeterminate(self) -> "RemoteRepositoryVerdict":
        if self.is_indeterminate:
            raise IndeterminateError(self)
        return self

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["state"] = self.state.value
        return data


def verdict_from_result(remote_uri: str, result: CommandResult) -> RemoteRepositoryVerdict:
    """Map a probe's exit code to a verdict."""
    state, message = _EXIT_CODE_STATES.get(result.exit_code, (RemoteState.INDETERMINATE, "Unexpected Error"))
    return RemoteRepositoryVerdict(
        remote_uri=remote_uri,
        state=state,
        exit_code=result.exit_code,
        stdout=result.stdout,
        stderr=result.stderr,
        message=message,
    )


def _require_uri(remote_uri: object) -> str:
    if not isinstance(remote_uri, str) or not remote_uri:
        raise TypeError(
            f"ERROR_INVALID_TYPE: Expected non-empty string for remote_uri but got {type(remote_uri).__name__}"
        )
    return remote_uri


class RemoteRepositoryStateClassifier:
    """Read-only probes against a remote Git repository."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        *,
        git_binary: str = "git",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._runner: CommandRunner = runner or ShellCommandRunner()
        self._git = git_binary
        self._sleep = sleep

    def _probe_args(self, remote_uri: str, exit_code: bool = True) -> list[str]:
        if exit_code:
            return [self._git, "ls-remote", "--exit-code", "-h", remote_uri]
        return [self._git, "ls-remote", "-h", remote_uri]

    async def classify(self, remote_uri: str, delay_seconds: float = 0) -> RemoteRepositoryVerdict:
        """Probe ``remote_uri``, optionally waiting ``delay_seconds`` first.

        The delay throttles repeated checks against a remote that may be
        rate limited or still being provisioned.
        """
        _require_uri(remote_uri)
        if isinstance(delay_seconds, bool) or not isinstance(delay_seconds, (int, float)) or math.isnan(delay_seconds):
            raise TypeError(f"ERROR_INVALID_TYPE: Expected a number for delay_seconds but got {delay_seconds!r}")

        if delay_seconds > 0:
            logger.debug("Waiting %ss before probing %s", delay_seconds, remote_uri)
            await self._sleep(delay_seconds)

        result = await self._runner.run_async(self._probe_args(remote_uri))
        verdict = verdict_from_result(remote_uri, result)
        if verdict.is_indeterminate:
            logger.warning(
                "Probe of %s ended with unexpected exit code %d: %s",
                remote_uri,
                result.exit_code,
                result.stderr.strip(),
            )
        else:
            logger.debug("Probe of %s: %s (exit %d)", remote_uri, verdict.state.value, result.exit_code)
        return verdict

    def is_reachable_with_history(self, remote_uri: str) -> bool:
        """True when the remote is readable and has at least one commit."""
        _require_uri(remote_uri)
        try:
            check(self._runner, self._probe_args(remote_uri))
        except CommandFailedError as exc:
            logger.debug("%s", exc)
            return False
        return True

    def is_remote_readable(self, remote_uri: str) -> bool:
        """True when the remote exists and the current user can read it."""
        _require_uri(remote_uri)
        try:
            check(self._runner, self._probe_args(remote_uri, exit_code=False))
        except CommandFailedError as exc:
            logger.debug("%s", exc)
            return False
        return True

    def is_git_installed(self) -> bool:
        return self._runner.which(self._git) is not None


def get_repo_name_from_uri(remote_uri: str) -> str:
    """Extract the bare repository name, e.g. ``my-repo`` from ``https://host/org/my-repo.git``."""
    if not isinstance(remote_uri, str):
        raise TypeError("ERROR_UNEXPECTED_TYPE: String expected for remote_uri")

    match = _REPO_NAME_RE.search(remote_uri)
    segment = match.group(0) if match else ""
    repo_name = segment[: segment.rfind(".")] if "." in segment else segment
    repo_name = repo_name[1:]
    if not repo_name:
        raise UnreadableRepoNameError(f"Could not read a repository name from '{remote_uri}'")
    logger.debug("Repository name for %s: %s", remote_uri, repo_name)
    return repo_name


def is_git_uri_valid(remote_uri: str) -> bool:
    """Syntactic check for ssh:, git:, http(s): and git@host: remote URIs ending in .git."""
    if not isinstance(remote_uri, str):
        raise TypeError("ERROR_UNEXPECTED_TYPE: String expected for remote_uri")
    return _GIT_URI_RE.search(remote_uri) is not None


__all__ = [
    "RemoteRepositoryStateClassifier",
    "RemoteRepositoryVerdict",
    "RemoteState",
    "get_repo_name_from_uri",
    "is_git_uri_valid",
    "verdict_from_result",
]
