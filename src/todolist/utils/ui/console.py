"""Shared rich console."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=None)
def get_console() -> Console:
    """Console used by every command.

    Emoji codes are left alone so task text such as ``:fire:`` prints as typed.
    """
    return Console(highlight=False, emoji=False)
