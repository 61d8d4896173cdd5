"""
Runtime dependency models for the lambda-lift launcher.

This package provides Pydantic data models for parsing the table of prebuilt
lambda-lift release artifacts and resolving the one for the current platform.
"""

from .runtime_dependencies import (
    RuntimeDependenciesConfig,
    ReleaseArtifact,
)

__all__ = [
    "RuntimeDependenciesConfig",
    "ReleaseArtifact",
]
