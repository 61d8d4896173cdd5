"""
Pydantic data models for runtime_dependencies.json.

This module describes the prebuilt lambda-lift binaries attached to a release
and resolves which of them belongs to a given platform.
"""

import json
from pathlib import Path, PurePath
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from lambda_lift_launcher.launcher_exceptions import ArtifactTableError, UnsupportedPlatformError
from lambda_lift_launcher.launcher_utils import PlatformId

RUNTIME_DEPENDENCIES_PATH = PurePath(Path(__file__).resolve().parent.parent, "runtime_dependencies.json")


class ReleaseArtifact(BaseModel):
    """
    A downloadable release asset for one operating system and architecture.
    """

    os: str = Field(..., description="Operating system family: linux, darwin or windows")
    arch: str = Field(..., description="CPU architecture: amd64 or arm64")
    name: str = Field(..., description="File name of the asset in the release")

    class Config:
        frozen = True

    def matches(self, platform_id: PlatformId) -> bool:
        return self.os == platform_id.os and self.arch == platform_id.arch


class RuntimeDependenciesConfig(BaseModel):
    """
    Complete runtime dependencies configuration.

    Structure:
    {
      "_description": "...",
      "artifacts": [
        {"os": "linux", "arch": "amd64", "name": "lambda-lift-linux-x64"},
        ...
      ]
    }

    The table is fixed: a platform without an entry has no fallback.
    """

    description: Optional[str] = Field(None, alias="_description")
    artifacts: List[ReleaseArtifact] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    @classmethod
    def load(cls, path: Optional[Union[str, PurePath]] = None) -> "RuntimeDependenciesConfig":
        """
        Load and validate a runtime_dependencies.json file, the packaged one by default.

        Raises:
            ArtifactTableError: if the file is missing, is not JSON or does not match the model
        """
        path = str(path or RUNTIME_DEPENDENCIES_PATH)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls(**json.load(f))
        except (OSError, ValueError, TypeError) as e:
            # pydantic's ValidationError and json's decode errors are ValueErrors
            raise ArtifactTableError(path, e) from e

    def get_artifact(self, platform_id: PlatformId) -> ReleaseArtifact:
        """
        Get the release artifact built for the given platform.

        Raises:
            UnsupportedPlatformError: if no artifact is published for the platform
        """
        for artifact in self.artifacts:
            if artifact.matches(platform_id):
                return artifact
        raise UnsupportedPlatformError(platform_id.os, platform_id.arch)

    def get_artifact_name(self, platform_id: PlatformId) -> str:
        return self.get_artifact(platform_id).name

    def supported_platforms(self) -> List[PlatformId]:
        return [PlatformId(os=a.os, arch=a.arch) for a in self.artifacts]
