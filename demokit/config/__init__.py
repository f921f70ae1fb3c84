"""Configuration models and loaders.

Project-level settings come from the project manifest, developer settings
from the hidden local config directory, tool settings from YAML.
"""

from demokit.config.loader import load_json_section, load_settings, read_json_file
from demokit.config.schema import DemoKitSettings, LocalDeveloperConfig, ProjectLevelConfig

__all__ = [
    "DemoKitSettings",
    "LocalDeveloperConfig",
    "ProjectLevelConfig",
    "load_json_section",
    "load_settings",
    "read_json_file",
]
