"""
lambda-lift launcher: runs lambda-lift through npx when available, otherwise
through a prebuilt binary downloaded into the user cache.
"""

from lambda_lift_launcher.launcher import Launcher
from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_logger import LauncherLogger

__version__ = "0.1.0"

__all__ = ["Launcher", "LauncherConfig", "LauncherLogger"]
