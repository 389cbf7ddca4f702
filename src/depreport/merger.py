"""Merging of CLI options, config file and environment into a report request."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from depreport.config.api import collect_api_options
from depreport.config.env import EnvVars
from depreport.config.file import ConfigFile
from depreport.errors import InvalidFormat, NoFormatProvided
from depreport.models import OutputFormat, ProjectOverride, ReportKind, ReportRequest
from depreport.precedence import non_empty
from depreport.target.resolver import resolve_target

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = timedelta(minutes=60)


@dataclass(frozen=True)
class ReportCliOptions:
    """Raw options of the ``report`` command."""

    kind: ReportKind = ReportKind.ATTRIBUTION
    path: str = "."
    json_output: bool = False  # Deprecated, equivalent to --format json
    format: str | None = None
    timeout: int | None = None  # seconds
    api_key: str | None = None
    endpoint: str | None = None
    project: str | None = None
    revision: str | None = None
    branch: str | None = None
    config_path: Path | None = None
    debug: bool = False


def validate_output_format(json_output: bool, raw: str | None) -> OutputFormat:
    """Decide the output format.

    The legacy ``--json`` flag wins over any ``--format`` value. Without
    either, there is no default.

    Raises:
        InvalidFormat: If ``raw`` is not a supported format string.
        NoFormatProvided: If neither option was given.
    """
    if json_output:
        return OutputFormat.JSON
    if raw is None:
        raise NoFormatProvided()

    fmt = OutputFormat.parse(raw)
    if fmt is None:
        raise InvalidFormat(raw)
    return fmt


def resolve_timeout(seconds: int | None) -> timedelta:
    """Return the CLI timeout, or the default when none was given."""
    if seconds is None:
        return DEFAULT_TIMEOUT
    return timedelta(seconds=seconds)


def produce_report_request(
    cli_options: ReportCliOptions,
    config_file: Optional[ConfigFile],
    env: EnvVars,
) -> ReportRequest:
    """Build the validated request for a single report.

    Options are checked before the filesystem is touched: the output
    format first, then API options, then the target path.

    Args:
        cli_options: Options given on the command line.
        config_file: Parsed config file, if any.
        env: Environment variables.

    Returns:
        The immutable report request.

    Raises:
        NoFormatProvided: If no format was given.
        InvalidFormat: If the format is not supported.
        MissingApiCredentials: If no API key is configured.
        NoSuchPath: If the path is neither a directory nor a file.
    """
    output_format = validate_output_format(cli_options.json_output, cli_options.format)
    api_options = collect_api_options(
        cli_options.api_key, cli_options.endpoint, config_file, env
    )
    timeout = resolve_timeout(cli_options.timeout)
    override = ProjectOverride(
        name=non_empty(cli_options.project),
        revision=non_empty(cli_options.revision),
        branch=non_empty(cli_options.branch),
    )

    identity, target = resolve_target(cli_options.path, override, config_file)
    logger.debug(
        "Resolved %s as %s (%s@%s)", cli_options.path, target, identity.name, identity.revision
    )

    return ReportRequest(
        api_options=api_options,
        target=target,
        output_format=output_format,
        timeout=timeout,
        kind=cli_options.kind,
        identity=identity,
    )
