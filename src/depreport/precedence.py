"""Per-field precedence between layered configuration sources."""

from typing import Optional, TypeVar

T = TypeVar("T")


def first_present(*values: Optional[T]) -> Optional[T]:
    """Return the first value that is not None.

    Values are given highest precedence first, so
    ``first_present(cli, config_file, env)`` layers three sources.
    """
    for value in values:
        if value is not None:
            return value
    return None


def non_empty(value: str | None) -> str | None:
    """Treat an empty string as an absent value."""
    return value or None
