"""Shell-style error messages."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

_PREFIX = "bash: "


def format_error(*args: str) -> str:
    """Join the parts of an error message behind the shell prefix."""
    return _PREFIX + "".join(args)


def print_error(*args: str, file: Optional[TextIO] = None) -> None:
    """Write an error message line to ``file`` (standard error by default)."""
    stream = file if file is not None else sys.stderr
    stream.write(format_error(*args) + "\n")
    stream.flush()