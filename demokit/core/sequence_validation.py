"""Validation of demo build sequence files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from demokit.config.loader import read_json_file
from demokit.errors import InvalidConfigError, UnparsedConfigError
from demokit.types.sequence import CommandSequence

logger = logging.getLogger(__name__)

_JSON_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    type(None): "null",
}


def _json_type(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def check_sequence_groups(raw: Any) -> None:
    """Hard precondition: ``sequenceGroups`` is a non-empty list.

    Runs before, and independently of, the per-group content checks.
    """
    if not isinstance(raw, dict):
        raise InvalidConfigError(f"Demo build sequence must be type 'object' not '{_json_type(raw)}'")
    groups = raw.get("sequenceGroups")
    if not isinstance(groups, list):
        raise InvalidConfigError(
            f"'sequenceGroups' must be type 'array' not '{_json_type(groups)}'", keys=["sequenceGroups"]
        )
    if len(groups) < 1:
        raise InvalidConfigError("'sequenceGroups' array must contain at least one member", keys=["sequenceGroups"])


def collect_invalid_keys(raw: dict[str, Any]) -> List[str]:
    """Return the path of every invalid key in the groups and steps."""
    invalid: List[str] = []
    if not isinstance(raw.get("options", {}), dict):
        invalid.append("options")

    for i, group in enumerate(raw["sequenceGroups"]):
        group_path = f"sequenceGroups[{i}]"
        if not isinstance(group, dict):
            invalid.append(group_path)
            continue
        for key in ("groupId", "groupName"):
            if not _is_filled(group.get(key)):
                invalid.append(f"{group_path}.{key}")

        steps = group.get("sequenceSteps", [])
        if not isinstance(steps, list):
            invalid.append(f"{group_path}.sequenceSteps")
            continue
        for j, step in enumerate(steps):
            step_path = f"{group_path}.sequenceSteps[{j}]"
            if not isinstance(step, dict):
                invalid.append(step_path)
                continue
            for key in ("stepName", "action"):
                if not _is_filled(step.get(key)):
                    invalid.append(f"{step_path}.{key}")
            if not isinstance(step.get("options", {}), dict):
                invalid.append(f"{step_path}.options")
    return invalid


def validate_sequence(raw: Any) -> CommandSequence:
    """Validate a raw sequence document and return the parsed model.

    Raises:
        InvalidConfigError: The group list is missing or empty, or group/step
            content is invalid (``keys`` lists every offending key).
        UnparsedConfigError: The document passed the key checks but still
            does not fit the sequence model.
    """
    check_sequence_groups(raw)
    invalid = collect_invalid_keys(raw)
    if invalid:
        raise InvalidConfigError(
            f"Demo build sequence has missing/invalid settings ({', '.join(invalid)}).", keys=invalid
        )
    try:
        return CommandSequence.model_validate(raw)
    except ValidationError as exc:
        raise UnparsedConfigError(f"Demo build sequence could not be parsed: {exc}") from exc


def load_sequence(config_dir: Path | str, filename: str) -> CommandSequence:
    """Read and validate the sequence file ``filename`` inside ``config_dir``."""
    path = Path(config_dir) / filename
    logger.debug("Loading demo build sequence from %s", path)
    return validate_sequence(read_json_file(path))
