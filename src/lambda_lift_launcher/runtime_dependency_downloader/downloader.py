"""
Dependency downloader implementation.

Ensures the standalone lambda-lift binary is present in the cache.
"""

import logging
import sys
from pathlib import Path
from typing import Union

from lambda_lift_launcher.launcher_exceptions import LauncherException
from lambda_lift_launcher.launcher_logger import LauncherLogger
from lambda_lift_launcher.launcher_utils import FileUtils
from lambda_lift_launcher.runtime_dependency_config.config_manager import (
    DependencyConfigManager,
    DownloadPlan,
    DownloadStatus,
)


class DependencyDownloader:
    """
    Downloads the binary described by the config manager's plan.
    """

    def __init__(
        self,
        config_manager: DependencyConfigManager,
        logger: LauncherLogger,
    ):
        """
        Initialize the dependency downloader.

        Args:
            config_manager: The DependencyConfigManager creating the download plan
            logger: Logger for progress and error messages
        """
        self.config_manager = config_manager
        self.logger = logger

    def ensure_binary(self, binary_path: Union[str, Path]) -> Path:
        """
        Make sure a runnable binary exists at binary_path.

        An existing file is accepted as is, without any network access.

        Raises:
            LauncherException: if the platform is unsupported or the download fails
        """
        plan = self.config_manager.create_download_plan(binary_path)
        if plan is None:
            self.logger.log(f"Using cached binary {binary_path}", logging.DEBUG)
            return Path(binary_path)

        self.download_dependency(plan)
        return Path(plan.destination_path)

    def download_dependency(self, plan: DownloadPlan) -> None:
        """
        Execute a download plan. Failures are terminal and not retried.
        """
        print(f"Downloading lambda-lift binary from {plan.url}...", file=sys.stderr)
        self.logger.log(f"Downloading {plan.artifact_name} from {plan.url}", logging.INFO)
        plan.status = DownloadStatus.IN_PROGRESS
        self.logger.log(repr(plan), logging.DEBUG)

        try:
            FileUtils.download_executable(
                self.logger,
                plan.url,
                plan.destination_path,
                make_executable=plan.make_executable,
                timeout=self.config_manager.launcher_config.download_timeout,
            )
        except LauncherException as e:
            self.config_manager.mark_download_completed(
                plan, success=False, error_message=f"Failed to download {plan.artifact_name}: {e}"
            )
            self.logger.log(f"Download {plan.status}: {plan.error_message}", logging.INFO)
            raise

        self.config_manager.mark_download_completed(plan, success=True)
        self.logger.log(
            f"Download {plan.status}: {plan.artifact_name} saved to {plan.destination_path}",
            logging.INFO,
        )
        print("✓ Binary downloaded successfully", file=sys.stderr)
