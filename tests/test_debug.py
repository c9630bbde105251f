import io

from minihell.ast import (
    AstNode,
    Command,
    NodeType,
    Redirection,
    SubshellRedirections,
    Token,
    TokenType,
)
from minihell.debug import (
    format_ast,
    format_ast_tree,
    format_command,
    format_indentation,
    format_outputs,
    format_tokens,
    print_ast_tree,
)


def pipe_tree():
    left = AstNode(NodeType.COMMAND, cmd=Command(args="ls"))
    right = AstNode(NodeType.COMMAND, cmd=Command(args="wc -l"))
    return AstNode(NodeType.PIPE, left=left, right=right)


def test_indentation_depth_zero_is_empty():
    assert format_indentation(0, True) == ""


def test_indentation_branches():
    assert format_indentation(1, True) == "└── "
    assert format_indentation(1, False) == "├── "
    assert format_indentation(2, True) == "    └── "


def test_format_outputs_empty():
    assert format_outputs([]) == "linked list : \n"


def test_format_outputs_entries():
    redirs = [Redirection("f", TokenType.REDIRECT_OUT), Redirection("g", TokenType.APPEND)]
    text = format_outputs(redirs)
    assert text.startswith("linked list : ")
    assert f"f({int(TokenType.REDIRECT_OUT)}) " in text
    assert f"g({int(TokenType.APPEND)}) " in text
    assert text.endswith("\n")


def test_format_tokens_one_line_each():
    tokens = [Token("ls", TokenType.WORD), Token("|", TokenType.PIPE, True)]
    lines = format_tokens(tokens).splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("Token: ls")
    assert f"Type: {int(TokenType.PIPE)}" in lines[1]
    assert lines[1].endswith("spaceb : 1")


def test_format_command_shows_args_and_output():
    cmd = Command(
        args="echo hi",
        output_file="out",
        outputs=[Redirection("out", TokenType.REDIRECT_OUT)],
        append=True,
    )
    text = format_command(cmd, 0, True)
    assert "ARGS: echo hi" in text
    assert "OUTPUT: out (APPEND)" in text
    assert "INPUT" not in text


def test_format_ast_none():
    assert format_ast(None, 0, True) == ""


def test_left_child_uses_middle_branch_when_right_exists():
    text = format_ast(pipe_tree(), 0, True)
    assert "├── COMMAND NODE" in text
    assert "└── COMMAND NODE" in text


def test_subshell_lists_three_redirection_lines():
    node = AstNode(
        NodeType.SUB,
        redi=SubshellRedirections(inputs=[Redirection("in", TokenType.REDIRECT_IN)]),
        left=AstNode(NodeType.COMMAND, cmd=Command(args="pwd")),
    )
    text = format_ast(node, 0, True)
    assert text.count("linked list : ") == 3
    assert "SUBSHELL ()" in text


def test_print_ast_tree_matches_format():
    buffer = io.StringIO()
    tree = pipe_tree()
    print_ast_tree(tree, file=buffer)
    assert buffer.getvalue() == format_ast_tree(tree)