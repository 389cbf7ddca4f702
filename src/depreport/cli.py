"""Command-line interface for depreport."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from depreport import __version__
from depreport.config import EnvVars, resolve_config_file
from depreport.errors import ReportConfigError
from depreport.merger import ReportCliOptions, produce_report_request
from depreport.models import OutputFormat, ReportKind

err_console = Console(stderr=True)

EXIT_CONFIG_ERROR = 2


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _print_error(error: ReportConfigError) -> None:
    """Print an error and its remediation hint to stderr."""
    err_console.print(
        f"[red bold]Error:[/red bold] {escape(str(error))}", highlight=False, soft_wrap=True
    )
    if error.hint:
        err_console.print(
            f"[yellow]Hint:[/yellow] {escape(error.hint)}", highlight=False, soft_wrap=True
        )


@click.group()
@click.version_option(version=__version__, prog_name="depreport")
def main() -> None:
    """depreport - Fetch dependency reports for a project or SBOM."""
    pass


@main.command()
@click.argument(
    "kind",
    metavar="REPORT",
    type=click.Choice([k.value for k in ReportKind]),
)
@click.argument("path", default=".")
@click.option(
    "--format",
    "-f",
    "output_format",
    help="Report format (plain text is 'text'). Supported formats: "
    + ", ".join(OutputFormat.choices()),
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output the report in JSON format (equivalent to '--format json', deprecated)",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    help="Duration to wait for the report, in seconds (default: 3600)",
)
@click.option("--api-key", help="API key for the report service")
@click.option("--endpoint", "-e", help="URL of the report service")
@click.option("--project", "-p", help="Override the detected project name")
@click.option("--revision", "-r", help="Override the detected project revision")
@click.option("--branch", "-b", help="Override the detected branch")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a .depreport.yml config file",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def report(
    kind: str,
    path: str,
    output_format: str | None,
    json_output: bool,
    timeout: int | None,
    api_key: str | None,
    endpoint: str | None,
    project: str | None,
    revision: str | None,
    branch: str | None,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Resolve the request for a report and print it as JSON.

    REPORT is the report type, e.g. 'attribution'.
    PATH is a project directory or an SBOM file (default: current directory).

    Example: depreport report --format html attribution
    """
    _configure_logging(debug)

    options = ReportCliOptions(
        kind=ReportKind(kind),
        path=path,
        json_output=json_output,
        format=output_format,
        timeout=timeout,
        api_key=api_key,
        endpoint=endpoint,
        project=project,
        revision=revision,
        branch=branch,
        config_path=config_path,
        debug=debug,
    )

    try:
        config_file = resolve_config_file(options.config_path)
        request = produce_report_request(options, config_file, EnvVars.from_environ())
    except ReportConfigError as e:
        _print_error(e)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(json.dumps(request.to_dict(), indent=2))


if __name__ == "__main__":
    main()
