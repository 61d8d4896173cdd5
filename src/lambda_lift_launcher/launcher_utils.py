"""
This file contains various utility functions like platform detection and file download
"""

import dataclasses
import logging
import os
import platform
import stat
import tempfile
from pathlib import Path
from typing import Optional

import requests

from lambda_lift_launcher.launcher_exceptions import (
    DirectoryCreateError,
    DownloadFailedError,
    PermissionFailedError,
    WriteFailedError,
)
from lambda_lift_launcher.launcher_logger import LauncherLogger

CHUNK_SIZE = 64 * 1024

_OS_ALIASES = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
}

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclasses.dataclass(frozen=True)
class PlatformId:
    """
    Operating system family and CPU architecture of a host, e.g. ("linux", "amd64")
    """

    os: str
    arch: str

    def is_windows(self) -> bool:
        return self.os == "windows"

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


class PlatformUtils:
    """
    This class provides utilities for platform detection and identification.
    """

    @staticmethod
    def normalize(system: str, machine: str) -> PlatformId:
        """
        Map raw platform.system()/platform.machine() values onto a PlatformId.
        Unknown values are kept lower-cased so lookups fail with the offending pair.
        """
        system = system.lower()
        machine = machine.lower()
        return PlatformId(
            os=_OS_ALIASES.get(system, system),
            arch=_ARCH_ALIASES.get(machine, machine),
        )

    @staticmethod
    def get_platform_id() -> PlatformId:
        """
        Returns the platform id for the current system
        """
        return PlatformUtils.normalize(platform.system(), platform.machine())


class FileUtils:
    """
    Utility functions for downloading files
    """

    @staticmethod
    def download_executable(
        logger: LauncherLogger,
        url: str,
        target_path: str,
        make_executable: bool = True,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Downloads the file at url to target_path. The body is streamed into a
        temporary file next to the target and moved into place only once it is
        complete, so target_path never holds a partial download.
        """
        logger.log(f"Downloading from {url} to {target_path}", logging.DEBUG)
        try:
            response = requests.get(url, stream=True, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise DownloadFailedError(url, cause=e) from e

        with response:
            if response.status_code != 200:
                logger.log(f"Error downloading file '{url}': {response.status_code} {response.reason}", logging.DEBUG)
                raise DownloadFailedError(url, status_code=response.status_code)

            target_dir = os.path.dirname(os.path.abspath(target_path))
            try:
                os.makedirs(target_dir, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateError(target_dir, e) from e

            try:
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{os.path.basename(target_path)}.", suffix=".part", dir=target_dir
                )
            except OSError as e:
                raise WriteFailedError(target_path, e) from e

            try:
                try:
                    with os.fdopen(fd, "wb") as f:
                        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                            if chunk:
                                f.write(chunk)
                except requests.exceptions.RequestException as e:
                    raise DownloadFailedError(url, cause=e) from e
                except OSError as e:
                    raise WriteFailedError(target_path, e) from e

                if make_executable:
                    try:
                        FileUtils.make_executable(tmp_path)
                    except OSError as e:
                        raise PermissionFailedError(target_path, e) from e

                try:
                    os.replace(tmp_path, target_path)
                except OSError as e:
                    raise WriteFailedError(target_path, e) from e
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise

    @staticmethod
    def make_executable(path: str) -> None:
        """
        Adds read and execute bits for everyone, like chmod 0755 on a fresh file.
        """
        mode = Path(path).stat().st_mode
        os.chmod(path, mode | stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)
