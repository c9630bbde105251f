import pytest

from minihell.environment import Environment, is_valid_var_name, parse_entry


def test_parse_entry_splits_at_first_equals():
    assert parse_entry("A=1=2") == ("A", "1=2")


def test_parse_entry_without_equals():
    assert parse_entry("NAME") == ("NAME", "")


def test_from_entries_round_trips_to_envp():
    entries = ["HOME=/home/user", "PATH=/bin:/usr/bin", "EMPTY="]
    env = Environment.from_entries(entries)
    assert env.to_envp() == entries


def test_get_missing_is_none():
    env = Environment.from_entries(["A=1"])
    assert env.get("B") is None
    assert env.get("A") == "1"


def test_set_existing_keeps_order():
    env = Environment.from_entries(["A=1", "B=2", "C=3"])
    env.set("B", "changed")
    assert list(env) == ["A", "B", "C"]
    assert env.get("B") == "changed"


def test_set_new_appends():
    env = Environment.from_entries(["A=1"])
    env.set("Z", "last")
    assert list(env) == ["A", "Z"]
    assert len(env) == 2


def test_unset_removes_and_ignores_missing():
    env = Environment.from_entries(["A=1", "B=2"])
    env.unset("A")
    env.unset("NOPE")
    assert "A" not in env
    assert list(env) == ["B"]


def test_valueless_variable():
    env = Environment()
    env.set("X", None)
    assert "X" in env
    assert env.get("X") is None
    assert env.to_envp() == ["X="]


def test_status_text():
    env = Environment()
    env.status = 127
    assert env.status_text() == "127"
    assert Environment().status_text() == "0"


@pytest.mark.parametrize("name", ["A", "_", "_x1", "abc_DEF9"])
def test_valid_names(name):
    assert is_valid_var_name(name) is True


@pytest.mark.parametrize("name", ["", None, "1abc", "a-b", "a b", "=x", "é"])
def test_invalid_names(name):
    assert is_valid_var_name(name) is False