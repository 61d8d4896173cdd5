"""
Runtime dependency downloader.

This package handles:
1. Skipping the download when the binary is already cached
2. Downloading the release artifact
3. Marking the binary executable
"""

from .downloader import DependencyDownloader

__all__ = ["DependencyDownloader"]
