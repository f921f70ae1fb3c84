"""Subprocess boundary."""

from demokit.runtime.shell import CommandResult, CommandRunner, ShellCommandRunner, check

__all__ = ["CommandResult", "CommandRunner", "ShellCommandRunner", "check"]
