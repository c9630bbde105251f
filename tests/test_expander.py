from minihell.environment import Environment
from minihell.expander import expand_arguments, expand_variables, split_quotes


def make_env():
    return Environment.from_entries(["HOME=/home/user", "V=x y", "EMPTY="])


def test_simple_variable():
    assert expand_variables("$HOME", make_env()) == "/home/user"


def test_variable_in_text():
    assert expand_variables("cd $HOME/docs", make_env()) == "cd /home/user/docs"


def test_single_quotes_prevent_expansion():
    assert expand_variables("'$HOME'", make_env()) == "'$HOME'"


def test_double_quotes_allow_expansion():
    assert expand_variables('"$HOME"', make_env()) == '"/home/user"'


def test_single_quote_inside_double_quotes_does_not_block():
    assert expand_variables("\"'$HOME'\"", make_env()) == "\"'/home/user'\""


def test_status_variable():
    env = make_env()
    env.status = 42
    assert expand_variables("$?", env) == str(42)


def test_unknown_variable_disappears():
    assert expand_variables("a$NOPE", make_env()) == "a"


def test_empty_result_is_none():
    assert expand_variables("$NOPE", make_env()) is None
    assert expand_variables("$EMPTY", make_env()) is None


def test_lone_dollar_kept():
    assert expand_variables("$", make_env()) == "$"
    assert expand_variables("$ x", make_env()) == "$ x"


def test_none_input():
    assert expand_variables(None, make_env()) is None


def test_text_without_dollar_unchanged():
    text = "echo 'a' \"b\" c"
    assert expand_variables(text, make_env()) == text


def test_split_quotes_keeps_quoted_spaces():
    assert split_quotes("a 'b c' d") == ["a", "b c", "d"]


def test_split_quotes_repeated_spaces_give_empty_words():
    assert split_quotes("a  b") == ["a", "", "b"]


def test_expand_arguments_splits_values():
    assert expand_arguments(["echo", "$V"], make_env()) == ["echo", "x", "y"]


def test_expand_arguments_drops_empty():
    assert expand_arguments(["$NOPE", "ls"], make_env()) == ["ls"]


def test_expand_arguments_none():
    assert expand_arguments(None, make_env()) is None


def test_expand_arguments_plain_words_unchanged():
    args = ["ls", "-l", "dir"]
    assert expand_arguments(args, make_env()) == args