"""Constants used across demokit.

Names of on-disk locations and probe exit codes are part of the external
contract and must stay stable.
"""

# Tool identity
TOOL_NAME = "demokit"

# Project manifest (project-level config lives under plugins.demokit.demo)
PROJECT_MANIFEST = "sfdx-project.json"
PROJECT_CONFIG_PATH = ("plugins", TOOL_NAME, "demo")

# Local developer config: <project>/.demokit-config/demokit-config.json
LOCAL_CONFIG_DIR = f".{TOOL_NAME}-config"
LOCAL_CONFIG_FILE = f"{TOOL_NAME}-config.json"
LOCAL_CONFIG_SECTION = "demo"

# Fixed project subdirectories
DEMO_CONFIG_DIR = "demo-config"
MDAPI_SOURCE_DIR = "mdapi-source"
DEMO_DATA_DIR = "demo-data"

# Sequence options
REBUILD_VALIDATION_ORG = "rebuildValidationOrg"
SCRATCH_DEF_JSON = "scratchDefJson"

# Validation org refresh group
REBUILD_GROUP_ID = "rebuild-org"
DELETE_SCRATCH_ORG = "delete-scratch-org"
CREATE_SCRATCH_ORG = "create-scratch-org"

# git ls-remote exit codes
PROBE_EXIT_HAS_HISTORY = 0
PROBE_EXIT_EMPTY = 2
PROBE_EXIT_NOT_FOUND = 128

# Tool settings (YAML)
DEFAULT_SETTINGS_PATH = f"~/.{TOOL_NAME}/{TOOL_NAME}.yml"
SETTINGS_PATH_ENV = "DEMOKIT_SETTINGS_PATH"
ENV_PATH_ENV = "DEMOKIT_ENV_PATH"
LOG_LEVEL_ENV = "DEMOKIT_LOG_LEVEL"
