"""Tokens, redirections and the syntax tree the shell executes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class TokenType(IntEnum):
    """Kinds of lexical tokens."""

    LPAREN = 0
    RPAREN = 1
    WORD = 2
    SINGLE_Q = 3
    DOUBLE_Q = 4
    PIPE = 5
    REDIRECT_IN = 6
    REDIRECT_OUT = 7
    APPEND = 8
    HEREDOC = 9
    AND = 10
    OR = 11


class NodeType(IntEnum):
    """Kinds of syntax tree nodes."""

    COMMAND = 0
    PIPE = 1
    AND = 2
    OR = 3
    SUB = 4


@dataclass
class Token:
    """A lexical token and whether whitespace preceded it."""

    value: str
    type: TokenType
    has_space: bool = False


@dataclass
class Redirection:
    """A redirection target: a file name, or a heredoc delimiter before collection."""

    file: str
    type: TokenType


@dataclass
class Command:
    """A simple command: its raw argument line and its redirections."""

    args: Optional[str] = None
    input_file: Optional[str] = None
    inputs: list[Redirection] = field(default_factory=list)
    output_file: Optional[str] = None
    outputs: list[Redirection] = field(default_factory=list)
    append: bool = False
    heredoc_delimiter: Optional[str] = None
    heredocs: list[Redirection] = field(default_factory=list)


@dataclass
class SubshellRedirections:
    """Redirections attached to a parenthesised group."""

    inputs: list[Redirection] = field(default_factory=list)
    outputs: list[Redirection] = field(default_factory=list)
    heredocs: list[Redirection] = field(default_factory=list)
    append: bool = False


@dataclass
class AstNode:
    """A node of the syntax tree."""

    type: NodeType
    cmd: Optional[Command] = None
    redi: Optional[SubshellRedirections] = None
    left: Optional["AstNode"] = None
    right: Optional["AstNode"] = None
    inpar: int = 0