"""Execution intent state machine.

An orchestrator instance moves from IDLE to RUNNING exactly once, when its
intent is set. The check and the transition happen under one lock so two
callers can never both observe IDLE.
"""

from __future__ import annotations

import logging
import threading

from demokit.errors import (
    IntentNotImplementedError,
    InvalidIntentError,
    SequenceAlreadyRunningError,
    UnknownIntentError,
)
from demokit.types.intent import ExecutionIntent, RunState

logger = logging.getLogger(__name__)

RUNNABLE_INTENTS = frozenset({ExecutionIntent.VALIDATE_DEMO, ExecutionIntent.DEPLOY_DEMO})
_PENDING_INTENTS = frozenset({ExecutionIntent.HEALTH_CHECK, ExecutionIntent.REPAIR_PROJECT})


def parse_intent(intent: ExecutionIntent | str) -> ExecutionIntent:
    """Narrow a requested intent to one that can be run.

    Raises:
        UnknownIntentError: Not a recognized intent, or NOT_SPECIFIED.
        IntentNotImplementedError: Recognized but not runnable yet.
    """
    try:
        resolved = ExecutionIntent(intent)
    except ValueError as exc:
        raise UnknownIntentError(f"Your command did not specify a valid intent ({intent!r}).") from exc

    if resolved in RUNNABLE_INTENTS:
        return resolved
    if resolved in _PENDING_INTENTS:
        raise IntentNotImplementedError(f"Your command uses an intent that is not yet implemented ({resolved.value}).")
    raise UnknownIntentError(f"Your command did not specify a valid intent ({resolved.value}).")


class ExecutionIntentController:
    """Guards which kind of run an orchestrator may execute, and that it runs once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._intent = ExecutionIntent.NOT_SPECIFIED
        self._state = RunState.IDLE
        self._executed = False

    @property
    def intent(self) -> ExecutionIntent:
        return self._intent

    @property
    def state(self) -> RunState:
        return self._state

    def set_intent(self, intent: ExecutionIntent | str) -> ExecutionIntent:
        """Set the intent and mark the controller RUNNING.

        Raises:
            SequenceAlreadyRunningError: An intent was already set on this instance.
            UnknownIntentError: See :func:`parse_intent`.
            IntentNotImplementedError: See :func:`parse_intent`.
        """
        with self._lock:
            return self._transition_locked(intent)

    def default_intent(self, intent: ExecutionIntent) -> ExecutionIntent:
        """Set ``intent`` only when no intent has been set yet; return the active one."""
        with self._lock:
            if self._state is RunState.IDLE and self._intent is ExecutionIntent.NOT_SPECIFIED:
                return self._transition_locked(intent)
            return self._intent

    def _transition_locked(self, intent: ExecutionIntent | str) -> ExecutionIntent:
        # Caller holds self._lock.
        if self._state is RunState.RUNNING:
            raise SequenceAlreadyRunningError("There is already another sequence running.")
        resolved = parse_intent(intent)
        self._intent = resolved
        self._state = RunState.RUNNING
        logger.info("Execution intent set to %s", resolved.value)
        return resolved

    def begin_execution(self) -> ExecutionIntent:
        """Claim the single execution slot for the active intent.

        Raises:
            SequenceAlreadyRunningError: A sequence was already executed by this instance.
            InvalidIntentError: The active intent cannot be executed.
        """
        with self._lock:
            if self._executed:
                raise SequenceAlreadyRunningError("This project has already executed a sequence.")
            if self._intent not in RUNNABLE_INTENTS:
                raise InvalidIntentError(f"The specified Execution Intent is not valid ({self._intent.value}).")
            self._executed = True
            return self._intent
