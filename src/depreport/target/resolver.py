"""Resolution of a user supplied path into a report target.

A path may name a project directory or a single artifact file. Each is
tried in turn by a probe; the first probe that matches decides both the
target shape and how the project identity is derived.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from depreport.config.file import ConfigFile
from depreport.errors import NoSuchPath, ProbeError
from depreport.models import (
    DirectoryTarget,
    FileTarget,
    ProjectIdentity,
    ProjectOverride,
    ReportTarget,
)
from depreport.target.artifact import derive_file_identity
from depreport.target.vcs import derive_directory_identity

logger = logging.getLogger(__name__)

Resolution = tuple[ProjectIdentity, ReportTarget]
Probe = Callable[[str, ProjectOverride, Optional[ConfigFile]], Resolution]


def _absolute(path: str) -> Path:
    # Unknown ~user and symlink loops raise RuntimeError, NUL bytes ValueError
    try:
        return Path(path).expanduser().resolve()
    except (OSError, RuntimeError, ValueError) as e:
        raise ProbeError(f"Cannot resolve {path!r}: {e}") from e


def probe_directory(
    path: str,
    override: ProjectOverride,
    config_file: Optional[ConfigFile] = None,
) -> Resolution:
    """Resolve ``path`` as a project root directory.

    Raises:
        ProbeError: If the path is not an existing directory.
    """
    directory = _absolute(path)
    if not directory.is_dir():
        raise ProbeError(f"Not a directory: {directory}")

    identity = derive_directory_identity(directory, override, config_file)
    return identity, DirectoryTarget(directory)


def probe_file(
    path: str,
    override: ProjectOverride,
    config_file: Optional[ConfigFile] = None,
) -> Resolution:
    """Resolve ``path`` as a single artifact file.

    Raises:
        ProbeError: If the path is not an existing, readable file.
    """
    file_path = _absolute(path)
    if not file_path.is_file():
        raise ProbeError(f"Not a file: {file_path}")
    if not os.access(file_path, os.R_OK):
        raise ProbeError(f"File is not readable: {file_path}")

    identity = derive_file_identity(file_path, override)
    return identity, FileTarget(file_path)


PROBES: tuple[Probe, ...] = (probe_directory, probe_file)


def resolve_target(
    path: str,
    override: ProjectOverride,
    config_file: Optional[ConfigFile] = None,
) -> Resolution:
    """Resolve ``path`` into a project identity and a report target.

    Directories are tried before files.

    Args:
        path: Path as given by the user.
        override: Project values that win over derived ones.
        config_file: Optional config file supplying project values for
            directory targets.

    Returns:
        Tuple of (identity, target).

    Raises:
        NoSuchPath: If no probe matches.
    """
    for probe in PROBES:
        try:
            return probe(path, override, config_file)
        except ProbeError as e:
            logger.debug("%s did not match %r: %s", probe.__name__, path, e)

    raise NoSuchPath(path)
