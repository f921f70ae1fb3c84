from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectLevelConfig(BaseModel):
    """Shared demo settings from ``plugins.demokit.demo`` in the project manifest.

    Every field is required to be a non-empty string, but parsing accepts
    missing, null and empty values so the completeness check can report all
    of them at once. A non-string value (e.g. ``"demoVersion": 1``) is a
    malformed section, not a missing setting.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    demo_alias: str = Field(default="", alias="demoAlias")
    demo_config: str = Field(default="", alias="demoConfig")
    demo_title: str = Field(default="", alias="demoTitle")
    demo_type: str = Field(default="", alias="demoType")
    demo_version: str = Field(default="", alias="demoVersion")
    git_hub_url: str = Field(default="", alias="gitHubUrl")
    git_remote_uri: str = Field(default="", alias="gitRemoteUri")
    partner_alias: str = Field(default="", alias="partnerAlias")
    partner_name: str = Field(default="", alias="partnerName")
    schema_version: str = Field(default="", alias="schemaVersion")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_missing(cls, v: object) -> object:
        """A JSON null counts as a missing setting, not a malformed one."""
        return "" if v is None else v

    def missing_keys(self) -> List[str]:
        """Return the config keys (as spelled on disk) that are missing or empty."""
        missing: List[str] = []
        for name, field in type(self).model_fields.items():
            if not getattr(self, name):
                missing.append(field.alias or name)
        return missing


class LocalDeveloperConfig(BaseModel):
    """Developer-specific target aliases from ``.demokit-config/demokit-config.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    dev_hub_alias: str = Field(default="", alias="devHubAlias")
    demo_validation_org_alias: str = Field(default="", alias="demoValidationOrgAlias")
    demo_deployment_org_alias: str = Field(default="", alias="demoDeploymentOrgAlias")


class DemoKitSettings(BaseModel):
    """Tool-level settings from ``~/.demokit/demokit.yml``."""

    model_config = ConfigDict(extra="allow")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    sequence_log_level: str = "error"
    git_binary: str = "git"
    probe_delay_seconds: float = Field(default=0, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v
