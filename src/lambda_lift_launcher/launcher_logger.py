"""
Structured logging for the lambda-lift launcher.
"""

import inspect
import logging
import os
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

LOG_LEVEL_ENV = "LAMBDA_LIFT_LAUNCHER_LOG_LEVEL"


class LogLine(BaseModel):
    """
    Represents a line in the launcher log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class LauncherLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "lambda_lift_launcher") -> None:
        self.logger = logging.getLogger(name)

    def log(self, debug_message: str, level: int, sanitized_error_message: str = "") -> None:
        """
        Log the debug and sanitized messages using the logger
        """
        if not self.logger.isEnabledFor(level):
            return

        debug_message = debug_message.replace("'", '"').replace("\n", " ")
        sanitized_error_message = sanitized_error_message.replace("'", '"').replace("\n", " ")

        # Collect details about the callee
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = os.path.basename(calframe[1][1])
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        message = debug_message
        if sanitized_error_message:
            message = f"{debug_message} ({sanitized_error_message})"

        self.logger.log(
            level=level,
            msg=LogLine(
                time=str(datetime.now()),
                level=logging.getLevelName(level),
                caller_file=caller_file,
                caller_name=caller_name,
                caller_line=caller_line,
                message=message,
            ).model_dump_json(),
        )


def configure_logging(level_name: Optional[str] = None) -> None:
    """
    Attach a stderr handler to the launcher logger. The level defaults to the
    value of LAMBDA_LIFT_LAUNCHER_LOG_LEVEL, or WARNING when unset or unknown.
    """
    level_name = (level_name or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logger = logging.getLogger("lambda_lift_launcher")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
