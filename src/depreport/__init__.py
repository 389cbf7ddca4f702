"""depreport - Report configuration for dependency analysis results."""

__version__ = "0.1.0"

from depreport.errors import (
    ConfigFileError,
    InvalidFormat,
    MissingApiCredentials,
    NoFormatProvided,
    NoSuchPath,
    ReportConfigError,
)
from depreport.merger import ReportCliOptions, produce_report_request
from depreport.models import (
    ApiOptions,
    DirectoryTarget,
    FileTarget,
    OutputFormat,
    ProjectIdentity,
    ProjectOverride,
    ReportKind,
    ReportRequest,
)

__all__ = [
    "__version__",
    "produce_report_request",
    "ReportCliOptions",
    "ReportRequest",
    "ReportKind",
    "OutputFormat",
    "FileTarget",
    "DirectoryTarget",
    "ProjectIdentity",
    "ProjectOverride",
    "ApiOptions",
    "ReportConfigError",
    "NoSuchPath",
    "NoFormatProvided",
    "InvalidFormat",
    "MissingApiCredentials",
    "ConfigFileError",
]
