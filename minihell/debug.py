"""Text dumps of tokens and syntax trees for debugging."""

from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

from minihell.ast import AstNode, Command, NodeType, Redirection, SubshellRedirections, Token


def format_tokens(tokens: Iterable[Token]) -> str:
    """One line per token: value, type number and the preceding-space flag."""
    return "".join(
        f"Token: {token.value:<10} Type: {int(token.type)}\tspaceb : {int(token.has_space)}\n"
        for token in tokens
    )


def format_indentation(depth: int, is_last: bool) -> str:
    """Tree indentation for a node at ``depth``."""
    if depth <= 0:
        return ""
    branch = "└── " if is_last else "├── "
    return "    " * (depth - 1) + branch


def format_outputs(redirections: Iterable[Redirection]) -> str:
    """A redirection list as one line of ``file(type)`` entries."""
    entries = "".join(f"{r.file}({int(r.type)}) " for r in redirections)
    return f"linked list : {entries}\n"


def format_command(cmd: Command, depth: int, is_last: bool) -> str:
    """A command's arguments and redirections."""
    inner = format_indentation(depth + 1, False)
    args = "(null)" if cmd.args is None else cmd.args
    text = format_indentation(depth, is_last) + "COMMAND:\n"
    text += f"{inner}ARGS: {args}\n"
    if cmd.inputs:
        text += f"{inner}INPUT: " + format_outputs(cmd.inputs)
    if cmd.output_file:
        mode = "APPEND" if cmd.append else "TRUNCATE"
        text += f"{inner}OUTPUT: {cmd.output_file} ({mode})\n"
        text += inner + format_outputs(cmd.outputs)
    if cmd.heredocs:
        text += f"{inner}HEREDOC: " + format_outputs(cmd.heredocs)
    return text


def format_ast(node: Optional[AstNode], depth: int, is_last: bool) -> str:
    """A node and its children, depth first."""
    if node is None:
        return ""
    indent = format_indentation(depth, is_last)
    text = indent
    if node.type is NodeType.COMMAND:
        text += f"COMMAND NODE ({node.inpar}):\n"
        text += format_command(node.cmd or Command(), depth + 1, True)
    elif node.type is NodeType.PIPE:
        text += f"PIPE NODE({node.inpar}):\n"
    elif node.type is NodeType.AND:
        text += f"AND NODE (&&)({node.inpar}):\n"
    elif node.type is NodeType.OR:
        text += f"OR NODE (||)({node.inpar}):\n"
    elif node.type is NodeType.SUB:
        redi = node.redi or SubshellRedirections()
        text += f"SUBSHELL ()({node.inpar}):\n"
        text += indent + format_outputs(redi.outputs)
        text += indent + format_outputs(redi.heredocs)
        text += indent + format_outputs(redi.inputs)
    else:
        text += f"UNKNOWN NODE: {int(node.type)}\n"
    if node.left is not None:
        text += format_ast(node.left, depth + 1, node.right is None)
    if node.right is not None:
        text += format_ast(node.right, depth + 1, True)
    return text


def format_ast_tree(root: Optional[AstNode]) -> str:
    """The whole tree under a heading."""
    return "AST TREE:\n" + format_ast(root, 0, True)


def print_ast_tree(root: Optional[AstNode], file: Optional[TextIO] = None) -> None:
    """Write the tree dump to ``file`` (standard output by default)."""
    stream = file if file is not None else sys.stdout
    stream.write(format_ast_tree(root))