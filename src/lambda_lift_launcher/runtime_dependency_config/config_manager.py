"""
Dependency configuration manager.

Decides whether the standalone lambda-lift binary has to be downloaded and,
if so, from which release URL.
"""

import os
from pathlib import Path
from typing import Optional, Union

from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_utils import PlatformId
from lambda_lift_launcher.runtime_dependency_models import RuntimeDependenciesConfig


class DownloadStatus:
    """Enumeration of download statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DownloadPlan:
    """
    A plan to download the binary for one platform.
    """

    def __init__(
            self,
            artifact_name: str,
            url: str,
            destination_path: str,
            make_executable: bool,
            status: str = DownloadStatus.PENDING,
    ):
        """
        Initialize a download plan.

        Args:
            artifact_name: Name of the release asset
            url: URL to download from
            destination_path: Where the binary is stored
            make_executable: Whether executable bits must be set after the download
            status: Current download status
        """
        self.artifact_name = artifact_name
        self.url = url
        self.destination_path = destination_path
        self.make_executable = make_executable
        self.status = status
        self.error_message: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"DownloadPlan(artifact={self.artifact_name}, "
            f"status={self.status}, url={self.url})"
        )


class DependencyConfigManager:
    """
    Resolves the release artifact for a platform and creates the download plan
    for the cached binary.
    """

    def __init__(
        self,
        runtime_deps_config: RuntimeDependenciesConfig,
        launcher_config: LauncherConfig,
        platform_id: PlatformId,
    ):
        self.runtime_deps = runtime_deps_config
        self.launcher_config = launcher_config
        self.platform_id = platform_id

    def get_release_url(self) -> str:
        """
        Returns the download URL of the artifact for the configured platform.

        Raises:
            UnsupportedPlatformError: if no artifact exists for the platform
        """
        artifact_name = self.runtime_deps.get_artifact_name(self.platform_id)
        return self.launcher_config.release_url(artifact_name)

    def create_download_plan(self, destination_path: Union[str, Path]) -> Optional[DownloadPlan]:
        """
        Create a download plan for the binary at destination_path.

        Returns:
            None when a file already exists at destination_path, otherwise a pending DownloadPlan

        Raises:
            UnsupportedPlatformError: if no artifact exists for the platform
        """
        destination_path = str(destination_path)
        if os.path.exists(destination_path):
            return None

        artifact_name = self.runtime_deps.get_artifact_name(self.platform_id)
        return DownloadPlan(
            artifact_name=artifact_name,
            url=self.launcher_config.release_url(artifact_name),
            destination_path=destination_path,
            make_executable=not self.platform_id.is_windows(),
        )

    @staticmethod
    def mark_download_completed(plan: DownloadPlan, success: bool = True, error_message: Optional[str] = None) -> None:
        """
        Mark a download plan as completed or failed.
        """
        plan.status = DownloadStatus.COMPLETED if success else DownloadStatus.FAILED
        plan.error_message = None if success else error_message
