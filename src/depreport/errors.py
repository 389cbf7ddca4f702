"""Errors raised while resolving a report configuration.

Every error carries a static remediation ``hint`` so that callers can show
the user how to fix the problem, not only what went wrong.
"""

from depreport.models import OutputFormat

FORMAT_HINT = "Provide a supported format via '--format'. Supported formats: " + ", ".join(
    OutputFormat.choices()
)


class ReportConfigError(Exception):
    """Base class for report configuration errors."""

    kind = "report_config_error"
    hint = ""


class NoSuchPath(ReportConfigError):
    """The target path is neither a directory nor a file."""

    kind = "no_such_path"
    hint = "Provide the path to an existing project directory or SBOM file."

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No such file or directory: {path}")


class NoFormatProvided(ReportConfigError):
    """Neither '--format' nor '--json' was given."""

    kind = "no_format_provided"
    hint = FORMAT_HINT

    def __init__(self) -> None:
        super().__init__("No format provided")


class InvalidFormat(ReportConfigError):
    """'--format' named a format outside the supported set."""

    kind = "invalid_format"
    hint = FORMAT_HINT

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Report format: {raw} is not supported")


class MissingApiCredentials(ReportConfigError):
    """No API key was found in any configuration layer."""

    kind = "missing_api_credentials"
    hint = (
        "Provide an API key via '--api-key', the 'apiKey' field of .depreport.yml, "
        "or the DEPREPORT_API_KEY environment variable."
    )

    def __init__(self) -> None:
        super().__init__("An API key is required to fetch reports")


class ConfigFileError(ReportConfigError):
    """The configuration file could not be read or parsed."""

    kind = "config_file_error"
    hint = (
        "Fix the configuration file, quoting values such as commit: '0123', "
        "or pass a different one with '--config'."
    )

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config file {path}: {reason}")


class ProbeError(Exception):
    """A target probe did not match; the resolver moves on to the next one."""
