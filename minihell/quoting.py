"""Quote stripping helpers used on command words."""

from __future__ import annotations

import re
from typing import Optional

_QUOTES = ("'", '"')
_SEGMENT = re.compile(r"'([^']*)'?|\"([^\"]*)\"?|([^'\"]+)")


def remove_all_quotes(text: Optional[str]) -> Optional[str]:
    """Drop every quote character."""
    if text is None:
        return None
    return text.replace("'", "").replace('"', "")


def remove_quotes(text: str) -> str:
    """Strip one pair of matching outer quotes, if present."""
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def strip_outer_quotes(text: str) -> str:
    """Strip one pair of matching outer quotes from a path such as HOME."""
    return remove_quotes(text)


def remove_first_layer_quotes(text: str) -> str:
    """Remove one layer of quoting from each quoted run of a word.

    A word that is quoted from its first to its last character is returned
    unchanged, as is one whose leading quote is never closed.
    """
    if len(text) < 2:
        return text
    result = ""
    rest = text
    if text[0] in _QUOTES:
        close = text.find(text[0], 1)
        if close == -1 or close == len(text) - 1:
            return text
        result = text[1:close]
        rest = text[close + 1:]
    return result + "".join(
        m.group(m.lastindex) for m in _SEGMENT.finditer(rest)
    )


def get_first_word(text: str) -> str:
    """Everything before the first space."""
    return text.split(" ", 1)[0]


def is_quoted_delimiter(delimiter: Optional[str]) -> bool:
    """Whether a heredoc delimiter starts with a quote (disabling expansion)."""
    return bool(delimiter) and delimiter[0] in _QUOTES


def _strip_argument(arg: str) -> str:
    if len(arg) > 1 and arg[0] in _QUOTES and arg[1] != arg[0] and arg[-1] == arg[0]:
        return arg[1:-1]
    return arg


def strip_argument_quotes(args: list[str]) -> list[str]:
    """Unquote arguments wrapped in a single pair of quotes.

    A command name that is just an empty pair of quotes becomes empty.
    """
    if not args:
        return []
    first = "" if args[0] in ('""', "''") else args[0]
    return [_strip_argument(arg) for arg in [first, *args[1:]]]