"""
Runtime dependency configuration management.

This package handles:
1. Resolving the release artifact for the current platform
2. Building the release download URL from the launcher configuration
3. Deciding whether the cached binary needs to be downloaded
"""

from .config_manager import DependencyConfigManager, DownloadPlan, DownloadStatus

__all__ = ["DependencyConfigManager", "DownloadPlan", "DownloadStatus"]
