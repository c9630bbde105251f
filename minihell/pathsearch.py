"""Locating programs on PATH."""

from __future__ import annotations

import os
import stat
import sys
from typing import Optional, TextIO

from minihell.environment import Environment
from minihell.errors import print_error


def join_path(directory: str, command: str) -> str:
    """``directory/command``, or an empty string for an empty command."""
    if not command:
        return ""
    return f"{directory}/{command}"


def is_directory(
    command: str, env: Optional[Environment] = None, err: Optional[TextIO] = None
) -> bool:
    """Whether ``command`` names a directory, reporting it as an error if so.

    Sets the status to 126 for a directory and to 1 when the path does not
    exist.
    """
    try:
        mode = os.stat(command).st_mode
    except (OSError, ValueError):
        if env is not None:
            env.status = 1
        return False
    if stat.S_ISDIR(mode):
        print_error(command, ": is a directory", file=err if err is not None else sys.stderr)
        if env is not None:
            env.status = 126
        return True
    return False


def search_command(command: str, env: Environment) -> Optional[str]:
    """The path of an executable for ``command``, or None.

    A command holding '/' is used as given when executable; otherwise each
    PATH entry is tried in order.
    """
    if "/" in command:
        return command if os.access(command, os.X_OK) else None
    path = env.get("PATH")
    if path is None or not command:
        return None
    segments = path.split(":")
    if segments and segments[-1] == "":
        segments.pop()
    for directory in segments:
        candidate = join_path(directory, command)
        if candidate and os.access(candidate, os.X_OK):
            return candidate
    return None