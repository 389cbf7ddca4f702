"""Collection of API connection options from all configuration layers."""

from typing import Optional

from depreport.config.env import EnvVars
from depreport.config.file import ConfigFile
from depreport.errors import MissingApiCredentials
from depreport.models import ApiOptions
from depreport.precedence import first_present, non_empty

DEFAULT_ENDPOINT = "https://app.fossa.com"


def collect_api_options(
    api_key: str | None,
    endpoint: str | None,
    config_file: Optional[ConfigFile],
    env: EnvVars,
) -> ApiOptions:
    """Layer API options: CLI flags > config file > environment.

    Raises:
        MissingApiCredentials: If no layer supplies an API key.
    """
    file_key = config_file.api_key if config_file else None
    file_server = config_file.server if config_file else None

    resolved_key = first_present(non_empty(api_key), non_empty(file_key), env.api_key)
    if not resolved_key:
        raise MissingApiCredentials()

    resolved_endpoint = first_present(
        non_empty(endpoint), non_empty(file_server), env.endpoint, DEFAULT_ENDPOINT
    )
    return ApiOptions(endpoint=resolved_endpoint, api_key=resolved_key)
