"""
This file contains the exceptions raised by the lambda-lift launcher.
"""

from typing import Optional


class LauncherException(Exception):
    """
    Base class for all errors raised while locating, downloading or starting lambda-lift.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedPlatformError(LauncherException):
    """
    No prebuilt artifact is published for the (os, arch) pair.
    """

    def __init__(self, os_name: str, arch: str):
        super().__init__(f"unsupported platform: {os_name}/{arch}")
        self.os_name = os_name
        self.arch = arch


class DownloadFailedError(LauncherException):
    """
    The release download failed, either in transport or with a non-200 response.
    """

    def __init__(self, url: str, status_code: Optional[int] = None, cause: Optional[BaseException] = None):
        if status_code is not None:
            message = f"failed to download binary: HTTP {status_code}"
        else:
            message = f"failed to download binary: {cause}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class DirectoryCreateError(LauncherException):
    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"failed to create directory: {cause}")
        self.path = path
        self.cause = cause


class WriteFailedError(LauncherException):
    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"failed to write binary: {cause}")
        self.path = path
        self.cause = cause


class PermissionFailedError(LauncherException):
    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"failed to make binary executable: {cause}")
        self.path = path
        self.cause = cause


class CacheDirUnavailableError(LauncherException):
    """
    The per-user cache directory of the host could not be determined.
    """


class SpawnFailedError(LauncherException):
    """
    A child process could not be started at all.
    """

    def __init__(self, argv0: str, cause: BaseException):
        super().__init__(f"failed to start {argv0}: {cause}")
        self.argv0 = argv0
        self.cause = cause


class ArtifactTableError(LauncherException):
    """
    The packaged table of release artifacts could not be read or validated.
    """

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"failed to read release artifact table {path}: {cause}")
        self.path = path
        self.cause = cause
