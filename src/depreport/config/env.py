"""Environment variables consulted when resolving API options."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

API_KEY_ENV_VAR = "DEPREPORT_API_KEY"
ENDPOINT_ENV_VAR = "DEPREPORT_ENDPOINT"


@dataclass(frozen=True)
class EnvVars:
    """Values read from the process environment."""

    api_key: str | None = None
    endpoint: str | None = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvVars":
        """Read variables from ``environ`` (defaults to ``os.environ``).

        Empty values are treated as unset.
        """
        if environ is None:
            environ = os.environ
        return cls(
            api_key=environ.get(API_KEY_ENV_VAR) or None,
            endpoint=environ.get(ENDPOINT_ENV_VAR) or None,
        )
