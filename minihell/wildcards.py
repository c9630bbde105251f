"""Expansion of '*' patterns against the entries of a directory."""

from __future__ import annotations

import os
import re
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

_BLANKS = re.compile(r"[ \t]+")


def match_pattern(pattern: str, name: str) -> bool:
    """Whether ``name`` matches ``pattern``, where '*' matches any run of characters."""
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.fullmatch(regex, name, re.DOTALL) is not None


def expand_wildcard(pattern: str, directory: PathLike = ".") -> list[str]:
    """Names in ``directory`` matching ``pattern``, sorted.

    Hidden entries match too; '.' and '..' never do. An unreadable
    directory gives no matches.
    """
    try:
        names = os.listdir(directory)
    except OSError:
        return []
    return sorted(
        name
        for name in names
        if name not in (".", "..") and match_pattern(pattern, name)
    )


def expand_token(token: str, directory: PathLike = ".") -> str:
    """Replace a word holding '*' by its matches, space separated.

    Without a '*' or without matches the word is returned unchanged.
    """
    if "*" not in token:
        return token
    matches = expand_wildcard(token, directory)
    if not matches:
        return token
    return " ".join(matches)


def expand_line(line: Optional[str], directory: PathLike = ".") -> Optional[str]:
    """Expand every blank-separated word of ``line``, rejoined with single spaces.

    A line with no words gives None.
    """
    if line is None:
        return None
    words = [w for w in _BLANKS.split(line) if w]
    if not words:
        return None
    return " ".join(expand_token(word, directory) for word in words)