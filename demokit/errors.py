"""Error taxonomy for demokit.

Every fatal error carries a stable ``kind`` prefix plus a readable detail, e.g.
``ERROR_INVALID_CONFIG: Missing or empty settings: demoAlias, gitRemoteUri``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from demokit.helpers.git_remote import RemoteRepositoryVerdict


class DemoKitError(Exception):
    """Base class for all demokit errors."""

    kind = "ERROR_DEMOKIT"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.kind}: {detail}")
        self.detail = detail


class MissingArgumentsError(DemoKitError):
    """Raised when a constructor is called without its required collaborators."""

    kind = "ERROR_MISSING_ARGUMENTS"


class UnparsedConfigError(DemoKitError):
    """Raised when a config file cannot be parsed into the expected shape."""

    kind = "ERROR_UNPARSED_CONFIG"


class ConfigNotFoundError(DemoKitError):
    """Raised when a required config file does not exist."""

    kind = "ERROR_CONFIG_NOT_FOUND"

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        super().__init__(detail or f"File does not exist - {path}")
        self.path = Path(path)


class InvalidConfigError(DemoKitError):
    """Raised when parsed config is semantically incomplete or malformed."""

    kind = "ERROR_INVALID_CONFIG"

    def __init__(self, detail: str, keys: Iterable[str] = ()) -> None:
        super().__init__(detail)
        self.keys = tuple(keys)


class SequenceAlreadyRunningError(DemoKitError):
    kind = "ERROR_SEQUENCE_RUNNING"


class UnknownIntentError(DemoKitError):
    kind = "ERROR_UNKNOWN_INTENT"


class InvalidIntentError(DemoKitError):
    kind = "ERROR_INVALID_INTENT"


class IntentNotImplementedError(DemoKitError):
    kind = "ERROR_INTENT_NOT_IMPLEMENTED"


class InvalidTargetDirError(DemoKitError):
    """Raised when a target directory could not be created."""

    kind = "ERROR_INVALID_TARGET_DIR"

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        super().__init__(detail or f"Target directory could not be created - {path}")
        self.path = Path(path)


class NoTargetDirError(DemoKitError):
    """Raised when a target directory exists but cannot be entered."""

    kind = "ERROR_NO_TARGET_DIR"

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        super().__init__(detail or f"Target directory was created but is not usable - {path}")
        self.path = Path(path)


class DestinationNotEmptyError(DemoKitError):
    kind = "ERROR_DESTINATION_NOT_EMPTY"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Destination path '{path}' already exists and is not an empty directory.")
        self.path = Path(path)


class UnreadableRepoNameError(DemoKitError):
    kind = "ERROR_UNREADABLE_REPO_NAME"


class CommandFailedError(DemoKitError):
    """Raised by checked runner calls when a command exits non-zero."""

    kind = "ERROR_COMMAND_FAILED"

    def __init__(self, args: Sequence[str], exit_code: int, stderr: str = "") -> None:
        detail = f"`{' '.join(args)}` exited with code {exit_code}"
        if stderr.strip():
            detail = f"{detail}: {stderr.strip()}"
        super().__init__(detail)
        self.command = tuple(args)
        self.exit_code = exit_code
        self.stderr = stderr


class IndeterminateError(DemoKitError):
    """Raised when a remote probe ends with an exit code outside the known set."""

    kind = "ERROR_INDETERMINATE_REMOTE"

    def __init__(self, verdict: "RemoteRepositoryVerdict") -> None:
        super().__init__(f"{verdict.message} (exit code {verdict.exit_code}) - {verdict.remote_uri}")
        self.verdict = verdict


__all__ = [
    "CommandFailedError",
    "ConfigNotFoundError",
    "DemoKitError",
    "DestinationNotEmptyError",
    "IndeterminateError",
    "IntentNotImplementedError",
    "InvalidConfigError",
    "InvalidIntentError",
    "InvalidTargetDirError",
    "MissingArgumentsError",
    "NoTargetDirError",
    "SequenceAlreadyRunningError",
    "UnknownIntentError",
    "UnparsedConfigError",
    "UnreadableRepoNameError",
]
