"""Configuration sources: config file, environment and API options."""

from .api import DEFAULT_ENDPOINT, collect_api_options
from .env import EnvVars
from .file import ConfigFile, load_config_file, resolve_config_file

__all__ = [
    "ConfigFile",
    "EnvVars",
    "DEFAULT_ENDPOINT",
    "collect_api_options",
    "load_config_file",
    "resolve_config_file",
]
