"""Resolution of report targets and their project identity."""

from .artifact import derive_file_identity
from .resolver import probe_directory, probe_file, resolve_target
from .vcs import derive_directory_identity

__all__ = [
    "resolve_target",
    "probe_directory",
    "probe_file",
    "derive_directory_identity",
    "derive_file_identity",
]
