import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence, Type, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from demokit.config.schema import DemoKitSettings
from demokit.constants import DEFAULT_SETTINGS_PATH, ENV_PATH_ENV, SETTINGS_PATH_ENV
from demokit.errors import ConfigNotFoundError, UnparsedConfigError
from demokit.utils import expand_env_vars

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _warn_unknown_keys(model: BaseModel, path: str, config_path: Path) -> None:
    """Warn about keys the model does not declare."""
    if model.model_extra:
        logger.warning("Unknown keys in %s at %s: %s", path, config_path, list(model.model_extra.keys()))


def read_json_file(path: Path) -> Any:
    """Read a JSON file.

    Raises:
        ConfigNotFoundError: The file does not exist.
        UnparsedConfigError: The file is not valid JSON.
    """
    if not path.is_file():
        raise ConfigNotFoundError(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise UnparsedConfigError(f"Could not read {path}: {e}") from e


def load_json_section(path: Path, section: Sequence[str], model_class: Type[T]) -> T:
    """Load a nested section of a JSON config file into a pydantic model.

    Args:
        path: JSON file to read.
        section: Key path leading to the section, e.g. ``("plugins", "demokit", "demo")``.
        model_class: The pydantic model class to validate the section with.
    """
    node = read_json_file(path)
    for key in section:
        if not isinstance(node, dict) or key not in node:
            raise UnparsedConfigError(f"Section '{'.'.join(section)}' not found in {path}")
        node = node[key]
    if not isinstance(node, dict):
        raise UnparsedConfigError(
            f"Section '{'.'.join(section)}' in {path} must be an object, not {type(node).__name__}"
        )

    try:
        model = model_class.model_validate(expand_env_vars(node))
    except ValidationError as e:
        raise UnparsedConfigError(f"Section '{'.'.join(section)}' in {path} is malformed: {e}") from e
    _warn_unknown_keys(model, ".".join(section), path)
    return model


def load_settings(path: Optional[Path] = None) -> DemoKitSettings:
    """Load tool-level settings from YAML.

    A missing or unreadable file yields defaults. Invalid values raise
    pydantic's ``ValidationError``.
    """
    env_path = os.getenv(ENV_PATH_ENV)
    load_dotenv(Path(env_path).expanduser() if env_path else None)

    if path is None:
        path = Path(os.getenv(SETTINGS_PATH_ENV, DEFAULT_SETTINGS_PATH)).expanduser()
    if not path.exists():
        return DemoKitSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except Exception as e:  # noqa: BLE001 - settings are optional
        logger.warning("Failed to read settings file %s: %s", path, e)
        return DemoKitSettings()

    settings = DemoKitSettings.model_validate(expand_env_vars(raw))
    _warn_unknown_keys(settings, "root", path)
    return settings
