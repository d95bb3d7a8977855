"""Escaping of reference tokens in JSON pointers."""

from __future__ import annotations


def replace_substring(s: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old``, scanning left to right."""
    if not old:
        raise ValueError("the search string must not be empty")
    return s.replace(old, new)


def escape(s: str) -> str:
    """Escape ``~`` as ``~0`` and ``/`` as ``~1``."""
    return replace_substring(replace_substring(s, "~", "~0"), "/", "~1")


def unescape(s: str) -> str:
    """Undo :func:`escape`: ``~1`` becomes ``/``, then ``~0`` becomes ``~``."""
    return replace_substring(replace_substring(s, "~1", "/"), "~0", "~")