"""Expansion of ``$VAR`` and ``$?`` in command text."""

from __future__ import annotations

import re
from typing import Optional

from minihell.environment import Environment

_PIECE = re.compile(r"\$(?:(\?)|([A-Za-z0-9_]+))?|[^$]", re.DOTALL)


def _lookup(match: re.Match, env: Environment) -> Optional[str]:
    if match.group(1):
        return env.status_text()
    if match.group(2):
        return env.get(match.group(2))
    return "$"


def expand_variables(text: Optional[str], env: Environment) -> Optional[str]:
    """Expand variables outside single quotes; quotes themselves are kept.

    Unknown variables expand to nothing. An empty result gives None.
    """
    if text is None:
        return None
    pieces: list[str] = []
    in_single = False
    in_double = False
    for match in _PIECE.finditer(text):
        piece = match.group(0)
        if piece == "'" and not in_double:
            in_single = not in_single
        elif piece == '"' and not in_single:
            in_double = not in_double
        if piece.startswith("$") and not in_single:
            value = _lookup(match, env)
            if value is not None:
                pieces.append(value)
        else:
            pieces.append(piece)
    result = "".join(pieces)
    return result or None


def split_quotes(text: str) -> list[str]:
    """Split on spaces outside quotes, dropping the quote characters.

    Every space outside quotes ends a word, so repeated spaces give empty
    words; a trailing word is kept only when it is not empty.
    """
    words: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in text:
        if ch in ("'", '"'):
            in_quotes = not in_quotes
        elif ch == " " and not in_quotes:
            words.append("".join(current))
            current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def expand_arguments(
    args: Optional[list[str]], env: Environment
) -> Optional[list[str]]:
    """Expand each argument and split the results into words on spaces."""
    if args is None:
        return None
    result: list[str] = []
    for arg in args:
        expanded = expand_variables(arg, env)
        if expanded is None:
            continue
        for word in (w for w in expanded.split(" ") if w):
            if " " in word:
                result.extend(split_quotes(word))
            else:
                result.append(word)
    return result