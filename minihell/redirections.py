"""File redirections and heredoc collection."""

from __future__ import annotations

import itertools
import os
import sys
import tempfile
from typing import BinaryIO, Iterable, Optional, TextIO

from minihell.ast import AstNode, Command, NodeType, Redirection
from minihell.environment import Environment
from minihell.expander import expand_variables
from minihell.quoting import is_quoted_delimiter, remove_quotes

_HEREDOC_PREFIX = "minihell_heredoc_"
_heredoc_numbers = itertools.count()


class RedirectionError(Exception):
    """A redirection could not be set up; the message follows the shell prefix."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _open_last(
    redirections: Iterable[Redirection], flags: int
) -> Optional[int]:
    fd: Optional[int] = None
    for redirection in redirections:
        if fd is not None:
            os.close(fd)
            fd = None
        try:
            fd = os.open(redirection.file, flags | os.O_CLOEXEC, 0o644)
        except OSError:
            raise RedirectionError(
                f"{redirection.file}: No such file or directory"
            ) from None
    return fd


def open_input(redirections: Iterable[Redirection]) -> Optional[BinaryIO]:
    """Open every input file in turn and return the last one for reading.

    Raises RedirectionError at the first file that cannot be opened.
    Returns None when there are no redirections.
    """
    fd = _open_last(redirections, os.O_RDONLY)
    if fd is None:
        return None
    return os.fdopen(fd, "rb")


def open_output(
    redirections: Iterable[Redirection], append: bool
) -> Optional[BinaryIO]:
    """Create every output file in turn and return the last one for writing.

    Each file is truncated, or appended to when ``append`` is true.
    Raises RedirectionError at the first file that cannot be opened.
    Returns None when there are no redirections.
    """
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = _open_last(redirections, flags)
    if fd is None:
        return None
    return os.fdopen(fd, "ab" if append else "wb")


def read_heredoc(
    delimiter: str,
    expand: bool,
    env: Optional[Environment] = None,
    source: Optional[TextIO] = None,
    prompt: Optional[TextIO] = None,
) -> str:
    """Read lines up to the delimiter line or end of input.

    A ``> `` prompt is written before each line. With ``expand`` the
    variables of each line are expanded from ``env``.
    """
    reader = source if source is not None else sys.stdin
    prompter = prompt if prompt is not None else sys.stdout
    terminator = delimiter + "\n"
    collected: list[str] = []
    while True:
        prompter.write("> ")
        prompter.flush()
        line = reader.readline()
        if not line or line == terminator:
            break
        if expand and env is not None:
            line = expand_variables(line, env) or ""
        collected.append(line)
    return "".join(collected)


def collect_heredoc(
    cmd: Command,
    env: Optional[Environment] = None,
    source: Optional[TextIO] = None,
    prompt: Optional[TextIO] = None,
) -> None:
    """Read each heredoc of ``cmd`` into a temporary file.

    Each heredoc's delimiter is replaced by the name of the file holding
    its text. A quoted delimiter turns off variable expansion.
    """
    for heredoc in cmd.heredocs:
        filename = os.path.join(
            tempfile.gettempdir(), f"{_HEREDOC_PREFIX}{next(_heredoc_numbers)}"
        )
        try:
            handle = open(filename, "w", encoding="utf-8")
        except OSError:
            raise RedirectionError("heredoc temp file") from None
        with handle:
            handle.write(
                read_heredoc(
                    remove_quotes(heredoc.file),
                    not is_quoted_delimiter(heredoc.file),
                    env,
                    source,
                    prompt,
                )
            )
        heredoc.file = filename


def prepare_heredocs(
    node: Optional[AstNode],
    env: Optional[Environment] = None,
    source: Optional[TextIO] = None,
    prompt: Optional[TextIO] = None,
) -> None:
    """Collect the heredocs of every command in the tree, depth first."""
    if node is None:
        return
    if node.type is NodeType.COMMAND and node.cmd is not None and node.cmd.heredocs:
        collect_heredoc(node.cmd, env, source, prompt)
    prepare_heredocs(node.left, env, source, prompt)
    prepare_heredocs(node.right, env, source, prompt)


def heredoc_input(cmd: Optional[Command]) -> Optional[BinaryIO]:
    """Open the last collected heredoc file that exists, or return None."""
    if cmd is None:
        return None
    chosen: Optional[BinaryIO] = None
    for heredoc in cmd.heredocs:
        if not os.path.exists(heredoc.file):
            continue
        try:
            handle = open(heredoc.file, "rb")
        except OSError:
            if chosen is not None:
                chosen.close()
            raise RedirectionError(f"open{heredoc.file}") from None
        if chosen is not None:
            chosen.close()
        chosen = handle
    return chosen