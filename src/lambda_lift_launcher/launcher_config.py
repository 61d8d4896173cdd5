"""
Configuration parameters for the lambda-lift launcher.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LauncherConfig(BaseModel):
    """
    Constants injected into the launcher at startup. The defaults describe the
    published lambda-lift release.
    """

    version: str = Field("0.1.0", description="Release tag (without the leading v) to download")
    repository: str = Field("marnautoupages/lambda-lift", description="owner/name of the release repository")
    release_host: str = Field("github.com", description="Host serving the release downloads")
    tool_name: str = Field("lambda-lift", description="Package name passed to the delegate runner")
    cache_subdirectory: str = Field("lambda-lift", description="Directory under the user cache holding the binary")
    delegate_runner: str = Field("npx", description="Package runner probed on PATH before the standalone binary")
    download_timeout: Optional[float] = Field(None, description="Download timeout in seconds, None waits forever")

    class Config:
        frozen = True
        extra = "forbid"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LauncherConfig":
        """
        Create a LauncherConfig instance from a dictionary
        """
        return cls(**d)

    @property
    def releases_page(self) -> str:
        return f"https://{self.release_host}/{self.repository}/releases"

    def release_url(self, artifact_name: str) -> str:
        """
        URL of the given artifact in the configured release.
        """
        return f"{self.releases_page}/download/v{self.version}/{artifact_name}"
