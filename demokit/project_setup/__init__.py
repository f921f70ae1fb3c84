"""Local working copy setup for demo projects."""

from demokit.project_setup.git_repo import LocalRepositoryProvisioner

__all__ = ["LocalRepositoryProvisioner"]
