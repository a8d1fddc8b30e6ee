"""Helpers that join values of any type into one string."""

from __future__ import annotations

from typing import Any

SEPARATOR = ", "


def join_string(*args: Any) -> str:
    """Concatenate the text form of every argument, with nothing in between."""
    return "".join(str(arg) for arg in args)


def join_string_sep(first: Any, *args: Any) -> str:
    """Join the text form of all arguments, separated by ``", "``."""
    return SEPARATOR.join(str(item) for item in (first, *args))