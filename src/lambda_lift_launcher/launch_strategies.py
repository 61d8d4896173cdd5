"""
The ways lambda-lift can be started, tried in order by the Launcher.
"""

import logging
import shutil
from typing import List, Optional, Sequence

from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_logger import LauncherLogger
from lambda_lift_launcher.launcher_settings import LauncherSettings
from lambda_lift_launcher.launcher_utils import PlatformId, PlatformUtils
from lambda_lift_launcher.process_executor import RunResult, run_process
from lambda_lift_launcher.runtime_dependency_config import DependencyConfigManager
from lambda_lift_launcher.runtime_dependency_downloader import DependencyDownloader
from lambda_lift_launcher.runtime_dependency_models import RuntimeDependenciesConfig


class LaunchStrategy:
    """
    A way of starting lambda-lift. run() returns None to let the next strategy
    try, or a RunResult once this strategy has taken responsibility.
    """

    name = "base"

    def __init__(self, config: LauncherConfig, logger: LauncherLogger):
        self.config = config
        self.logger = logger

    def run(self, args: Sequence[str]) -> Optional[RunResult]:
        raise NotImplementedError


class DelegateRunnerStrategy(LaunchStrategy):
    """
    Runs `<runner> lambda-lift <args...>` through a package runner found on PATH.
    """

    name = "delegate"

    def find_runner(self) -> Optional[str]:
        return shutil.which(self.config.delegate_runner)

    def build_command(self, runner_path: str, args: Sequence[str]) -> List[str]:
        return [runner_path, self.config.tool_name, *args]

    def run(self, args: Sequence[str]) -> Optional[RunResult]:
        runner_path = self.find_runner()
        if runner_path is None:
            self.logger.log(f"{self.config.delegate_runner} not found on PATH", logging.DEBUG)
            return None

        result = run_process(self.build_command(runner_path, args), self.logger)
        if not result.started:
            # Nothing ran, so the standalone binary can still be tried
            self.logger.log(f"{self.config.delegate_runner} could not be started", logging.INFO, str(result.error))
            return None
        return result


class StandaloneBinaryStrategy(LaunchStrategy):
    """
    Runs the prebuilt binary from the user cache, downloading it first if needed.
    """

    name = "standalone"

    def __init__(
        self,
        config: LauncherConfig,
        logger: LauncherLogger,
        platform_id: Optional[PlatformId] = None,
        runtime_deps: Optional[RuntimeDependenciesConfig] = None,
    ):
        super().__init__(config, logger)
        self.platform_id = platform_id or PlatformUtils.get_platform_id()
        self._runtime_deps = runtime_deps

    @property
    def runtime_deps(self) -> RuntimeDependenciesConfig:
        """
        The release artifact table, read on first use so delegate runs never touch it.
        """
        if self._runtime_deps is None:
            self._runtime_deps = RuntimeDependenciesConfig.load()
        return self._runtime_deps

    def find_binary(self) -> str:
        """
        Returns the cached binary path, downloading the binary when it is missing.

        Raises:
            LauncherException: if the artifact table or the cache path cannot be
                read, or the download fails
        """
        binary_path = LauncherSettings.get_binary_path(self.config, self.platform_id)
        config_manager = DependencyConfigManager(self.runtime_deps, self.config, self.platform_id)
        downloader = DependencyDownloader(config_manager, self.logger)
        return str(downloader.ensure_binary(binary_path))

    def run(self, args: Sequence[str]) -> Optional[RunResult]:
        binary_path = self.find_binary()
        return run_process([binary_path, *args], self.logger)
