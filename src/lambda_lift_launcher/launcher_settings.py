"""
Defines the filesystem locations used by the launcher
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_exceptions import CacheDirUnavailableError
from lambda_lift_launcher.launcher_utils import PlatformId, PlatformUtils


class LauncherSettings:
    """
    Provides the per-user cache locations used by the launcher
    """

    @staticmethod
    def get_user_cache_directory(
        platform_id: Optional[PlatformId] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Path:
        """
        Returns the host's per-user cache directory:
        %LocalAppData% on Windows, $HOME/Library/Caches on macOS,
        and $XDG_CACHE_HOME or $HOME/.cache elsewhere.
        """
        platform_id = platform_id or PlatformUtils.get_platform_id()
        environ = os.environ if environ is None else environ

        if platform_id.os == "windows":
            local_app_data = environ.get("LocalAppData") or environ.get("LOCALAPPDATA")
            if not local_app_data:
                raise CacheDirUnavailableError("%LocalAppData% is not defined")
            return Path(local_app_data)

        if platform_id.os == "darwin":
            home = environ.get("HOME")
            if not home:
                raise CacheDirUnavailableError("$HOME is not defined")
            return Path(home, "Library", "Caches")

        xdg_cache_home = environ.get("XDG_CACHE_HOME")
        if xdg_cache_home:
            if not os.path.isabs(xdg_cache_home):
                raise CacheDirUnavailableError("path in $XDG_CACHE_HOME is relative")
            return Path(xdg_cache_home)

        home = environ.get("HOME")
        if not home:
            raise CacheDirUnavailableError("neither $XDG_CACHE_HOME nor $HOME are defined")
        return Path(home, ".cache")

    @staticmethod
    def get_binary_path(
        config: LauncherConfig,
        platform_id: Optional[PlatformId] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Path:
        """
        Returns the path where the standalone binary is cached
        """
        platform_id = platform_id or PlatformUtils.get_platform_id()
        binary_name = config.tool_name + (".exe" if platform_id.is_windows() else "")
        cache_dir = LauncherSettings.get_user_cache_directory(platform_id, environ)
        return cache_dir / config.cache_subdirectory / binary_name
