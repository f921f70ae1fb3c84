"""Unit tests for config loading."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from demokit.config.loader import load_json_section, load_settings, read_json_file
from demokit.config.schema import DemoKitSettings, LocalDeveloperConfig, ProjectLevelConfig
from demokit.errors import ConfigNotFoundError, UnparsedConfigError

pytestmark = pytest.mark.unit

SECTION = ("plugins", "demokit", "demo")


def _write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_read_json_file_missing(tmp_path):
    with pytest.raises(ConfigNotFoundError, match="^ERROR_CONFIG_NOT_FOUND: File does not exist"):
        read_json_file(tmp_path / "absent.json")


def test_read_json_file_directory_is_not_a_config(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        read_json_file(tmp_path)


def test_read_json_file_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ trailing,", encoding="utf-8")

    with pytest.raises(UnparsedConfigError, match="^ERROR_UNPARSED_CONFIG: "):
        read_json_file(path)


def test_load_section_into_model(tmp_path, project_settings):
    path = _write_json(tmp_path / "sfdx-project.json", {"plugins": {"demokit": {"demo": project_settings}}})

    config = load_json_section(path, SECTION, ProjectLevelConfig)

    assert config.demo_alias == "MyDemo"
    assert config.git_remote_uri == "https://github.com/my-org/my-repo.git"
    assert config.missing_keys() == []


@pytest.mark.parametrize(
    "document",
    [
        {},
        {"plugins": {}},
        {"plugins": {"demokit": {}}},
        {"plugins": {"demokit": {"demo": "not-an-object"}}},
        {"plugins": ["demokit"]},
        [],
    ],
)
def test_load_section_missing_or_malformed(tmp_path, document):
    path = _write_json(tmp_path / "sfdx-project.json", document)

    with pytest.raises(UnparsedConfigError):
        load_json_section(path, SECTION, ProjectLevelConfig)


def test_load_section_wrong_value_type_is_unparsed(tmp_path):
    path = _write_json(tmp_path / "local.json", {"demo": {"devHubAlias": ["not", "a", "string"]}})

    with pytest.raises(UnparsedConfigError):
        load_json_section(path, ("demo",), LocalDeveloperConfig)


def test_load_section_expands_env_vars(tmp_path, monkeypatch):
    monkeypatch.setenv("DEMO_HUB", "CorpDevHub")
    path = _write_json(tmp_path / "local.json", {"demo": {"devHubAlias": "${DEMO_HUB}"}})

    config = load_json_section(path, ("demo",), LocalDeveloperConfig)

    assert config.dev_hub_alias == "CorpDevHub"


def test_load_section_warns_on_unknown_keys(tmp_path, caplog):
    path = _write_json(tmp_path / "local.json", {"demo": {"devHubAlias": "Hub", "favouriteColour": "teal"}})

    with caplog.at_level(logging.WARNING, logger="demokit.config.loader"):
        config = load_json_section(path, ("demo",), LocalDeveloperConfig)

    assert config.model_extra == {"favouriteColour": "teal"}
    assert "favouriteColour" in caplog.text


def test_missing_keys_lists_every_empty_setting(project_settings):
    project_settings["demoAlias"] = ""
    project_settings["gitRemoteUri"] = None
    del project_settings["schemaVersion"]

    config = ProjectLevelConfig.model_validate(project_settings)

    assert config.missing_keys() == ["demoAlias", "gitRemoteUri", "schemaVersion"]


def test_whitespace_setting_counts_as_present(project_settings):
    project_settings["partnerName"] = "  "

    assert ProjectLevelConfig.model_validate(project_settings).missing_keys() == []


def test_settings_default_when_file_missing(tmp_path):
    settings = load_settings(tmp_path / "absent.yml")

    assert settings == DemoKitSettings()
    assert settings.git_binary == "git"
    assert settings.sequence_log_level == "error"


def test_settings_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "demokit.yml"
    path.write_text("log_level: debug\nprobe_delay_seconds: 1.5\n", encoding="utf-8")
    monkeypatch.setenv("DEMOKIT_SETTINGS_PATH", str(path))

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.probe_delay_seconds == 1.5


def test_settings_expand_env_from_dotenv_file(tmp_path, monkeypatch):
    env_file = tmp_path / "demokit.env"
    env_file.write_text("DEMOKIT_TEST_GIT=/opt/git/bin/git\n", encoding="utf-8")
    settings_file = tmp_path / "demokit.yml"
    settings_file.write_text("git_binary: ${DEMOKIT_TEST_GIT}\n", encoding="utf-8")
    monkeypatch.setenv("DEMOKIT_ENV_PATH", str(env_file))
    # Registers the variable with monkeypatch so the value load_dotenv sets is undone.
    monkeypatch.setenv("DEMOKIT_TEST_GIT", "placeholder")
    monkeypatch.delenv("DEMOKIT_TEST_GIT")

    settings = load_settings(settings_file)

    assert settings.git_binary == "/opt/git/bin/git"


def test_settings_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "demokit.yml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == DemoKitSettings()


def test_settings_unreadable_yaml_yields_defaults(tmp_path, caplog):
    path = tmp_path / "demokit.yml"
    path.write_text("log_level: [unclosed\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="demokit.config.loader"):
        settings = load_settings(path)

    assert settings == DemoKitSettings()
    assert "Failed to read settings file" in caplog.text


def test_settings_invalid_values_raise(tmp_path):
    path = tmp_path / "demokit.yml"
    path.write_text("probe_delay_seconds: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(path)
