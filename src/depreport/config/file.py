"""Loading of the optional ``.depreport.yml`` configuration file.

Example file::

    version: 1
    server: https://app.fossa.com
    apiKey: abc123
    project:
      name: my-project
    revision:
      commit: 1a2b3c
      branch: main
"""

import logging
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path
from typing import Any, Optional

import yaml

from depreport.errors import ConfigFileError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = (".depreport.yml", ".depreport.yaml")

VALID_TOP_LEVEL_KEYS = {"version", "server", "apiKey", "project", "revision"}


@dataclass(frozen=True)
class ConfigFile:
    """Parsed contents of a configuration file."""

    path: Path
    version: int | None = None
    server: str | None = None
    api_key: str | None = None
    project_name: str | None = None
    revision: str | None = None
    branch: str | None = None

    @classmethod
    def from_dict(cls, path: Path, data: dict) -> "ConfigFile":
        """Create config from a parsed YAML mapping."""
        project = _section(path, data, "project")
        revision = _section(path, data, "revision")
        return cls(
            path=path,
            version=data.get("version"),
            server=_string(path, data, "server"),
            api_key=_string(path, data, "apiKey"),
            project_name=_string(path, project, "name", prefix="project."),
            revision=_string(path, revision, "commit", prefix="revision."),
            branch=_string(path, revision, "branch", prefix="revision."),
        )


def resolve_config_file(
    explicit_path: Optional[Path] = None,
    search_dir: Optional[Path] = None,
) -> Optional[ConfigFile]:
    """Find and load the configuration file.

    An explicitly requested file must exist. Otherwise the default file
    names are looked up in ``search_dir`` (the current directory when not
    given), and a missing file simply means no configuration.

    Raises:
        ConfigFileError: If the explicit file is missing or any file is invalid.
    """
    if explicit_path is not None:
        if not explicit_path.is_file():
            raise ConfigFileError(str(explicit_path), "file not found")
        return load_config_file(explicit_path)

    directory = search_dir if search_dir is not None else Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            logger.debug("Using config file %s", candidate)
            return load_config_file(candidate)

    logger.debug("No config file found in %s", directory)
    return None


def load_config_file(path: Path) -> ConfigFile:
    """Parse a configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed configuration. An empty document yields an empty config.

    Raises:
        ConfigFileError: If the file cannot be read, is not valid YAML, or is
            not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(str(path), str(e)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigFileError(str(path), f"invalid YAML: {e}") from e

    if data is None:
        return ConfigFile(path=path)

    if not isinstance(data, dict):
        raise ConfigFileError(str(path), f"expected a mapping, got {type(data).__name__}")

    for key in data:
        if key not in VALID_TOP_LEVEL_KEYS:
            _warn_unknown_key(path, str(key))

    return ConfigFile.from_dict(path, data)


def _section(path: Path, data: dict, key: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigFileError(str(path), f"'{key}' must be a mapping")
    return value


def _string(path: Path, data: dict, key: str, prefix: str = "") -> str | None:
    value: Any = data.get(key)
    if value is None:
        return None
    # YAML reads unquoted 0123 as octal 83, so numbers cannot be turned back into text
    if not isinstance(value, str):
        raise ConfigFileError(
            str(path), f"'{prefix}{key}' must be a string, quote the value"
        )
    return value


def _warn_unknown_key(path: Path, key: str) -> None:
    msg = f"Unknown key '{key}' in {path}"
    matches = get_close_matches(key, sorted(VALID_TOP_LEVEL_KEYS), n=1, cutoff=0.6)
    if matches:
        msg += f" (did you mean '{matches[0]}'?)"
    logger.warning(msg)
