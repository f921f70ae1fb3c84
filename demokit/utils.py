"""Shared helpers."""

import os
import re

# ${NAME} or ${NAME:-fallback}
_ENV_REF = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")


def _substitute(match: re.Match[str]) -> str:
    value = os.getenv(match.group("name"))
    if value:
        return value
    fallback = match.group("fallback")
    if fallback is not None:
        return fallback
    return match.group(0) if value is None else value


def expand_env_vars(config: object) -> object:
    """Return a copy of a parsed config tree with ``${VAR}`` references filled in.

    Only string values are rewritten; mapping keys and non-string scalars pass
    through unchanged. ``${VAR:-fallback}`` uses ``fallback`` when ``VAR`` is
    unset or empty. A plain reference to an unset variable is left as written
    so the completeness checks still see it.
    """
    if isinstance(config, dict):
        return {key: expand_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    if isinstance(config, str):
        return _ENV_REF.sub(_substitute, config)
    return config
