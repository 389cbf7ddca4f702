"""Data models for report configuration."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ReportKind(Enum):
    """Report types available from the report service."""

    ATTRIBUTION = "attribution"

    def __str__(self) -> str:
        return self.value


class OutputFormat(Enum):
    """Supported report output formats."""

    CSV = "csv"
    # The service returns CycloneDX reports with license text base64 encoded.
    CYCLONEDX_JSON = "cyclonedx-json"
    CYCLONEDX_XML = "cyclonedx-xml"
    HTML = "html"
    JSON = "json"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "text"
    SPDX = "spdx"
    SPDX_JSON = "spdx-json"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Optional["OutputFormat"]:
        """Match a canonical format string exactly.

        Matching is case-sensitive; ``"HTML"`` is not a valid format.

        Returns:
            The matching format, or None if the string is not canonical.
        """
        for fmt in cls:
            if fmt.value == raw:
                return fmt
        return None

    @classmethod
    def choices(cls) -> list[str]:
        """Return all canonical format strings in declaration order."""
        return [fmt.value for fmt in cls]


@dataclass(frozen=True)
class FileTarget:
    """A single artifact file (e.g. an SBOM) to report on."""

    path: Path

    def to_dict(self) -> dict:
        return {"type": "file", "path": str(self.path)}


@dataclass(frozen=True)
class DirectoryTarget:
    """A project root directory to report on."""

    path: Path

    def to_dict(self) -> dict:
        return {"type": "directory", "path": str(self.path)}


ReportTarget = Union[FileTarget, DirectoryTarget]


@dataclass(frozen=True)
class ProjectOverride:
    """User supplied project values that win over derived ones."""

    name: str | None = None
    revision: str | None = None
    branch: str | None = None


@dataclass(frozen=True)
class ProjectIdentity:
    """Resolved project name, revision and branch."""

    name: str
    revision: str
    branch: str | None = None

    def to_dict(self) -> dict:
        return {"name": self.name, "revision": self.revision, "branch": self.branch}


@dataclass(frozen=True)
class ApiOptions:
    """Connection options for the report service API."""

    endpoint: str
    api_key: str

    def __repr__(self) -> str:
        return f"ApiOptions(endpoint={self.endpoint!r}, api_key='<redacted>')"

    def to_dict(self) -> dict:
        """Convert to dictionary with the API key redacted."""
        return {"endpoint": self.endpoint, "api_key": "<redacted>"}


@dataclass(frozen=True)
class ReportRequest:
    """Fully resolved configuration for fetching a single report."""

    api_options: ApiOptions
    target: ReportTarget
    output_format: OutputFormat
    timeout: timedelta
    kind: ReportKind
    identity: ProjectIdentity

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "api_options": self.api_options.to_dict(),
            "target": self.target.to_dict(),
            "output_format": self.output_format.value,
            "timeout_seconds": int(self.timeout.total_seconds()),
            "kind": self.kind.value,
            "identity": self.identity.to_dict(),
        }
