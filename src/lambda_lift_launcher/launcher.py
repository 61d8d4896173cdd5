"""
The Launcher tries each launch strategy in turn until one of them runs lambda-lift.
"""

import logging
from typing import List, Optional, Sequence

from lambda_lift_launcher.launch_strategies import (
    DelegateRunnerStrategy,
    LaunchStrategy,
    StandaloneBinaryStrategy,
)
from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_exceptions import LauncherException
from lambda_lift_launcher.launcher_logger import LauncherLogger
from lambda_lift_launcher.process_executor import RunResult


class Launcher:
    def __init__(
        self,
        config: LauncherConfig,
        logger: LauncherLogger,
        strategies: Optional[List[LaunchStrategy]] = None,
    ):
        self.config = config
        self.logger = logger
        if strategies is None:
            strategies = [
                DelegateRunnerStrategy(config, logger),
                StandaloneBinaryStrategy(config, logger),
            ]
        self.strategies = strategies

    def launch(self, args: Sequence[str]) -> RunResult:
        """
        Run lambda-lift with args forwarded unmodified.

        The first strategy returning a RunResult decides the outcome; no other
        strategy is tried after it.

        Raises:
            LauncherException: if a strategy fails before starting lambda-lift
        """
        args = list(args)
        for strategy in self.strategies:
            self.logger.log(f"Trying {strategy.name} launch strategy", logging.DEBUG)
            result = strategy.run(args)
            if result is not None:
                return result
        raise LauncherException(f"no way to run {self.config.tool_name} was found")
