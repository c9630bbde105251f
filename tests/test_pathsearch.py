import io
import os

from minihell.environment import Environment
from minihell.pathsearch import is_directory, join_path, search_command


def _executable(path):
    path.write_text("#!/bin/sh\n")
    os.chmod(path, 0o755)
    return path


def test_join_path():
    assert join_path("/usr/bin", "ls") == "/usr/bin/ls"


def test_join_path_empty_command():
    assert join_path("/usr/bin", "") == ""


def test_is_directory_reports_directory(tmp_path):
    env = Environment()
    err = io.StringIO()
    assert is_directory(str(tmp_path), env, err) is True
    assert env.status == 126
    assert err.getvalue() == f"bash: {tmp_path}: is a directory\n"


def test_is_directory_missing_sets_status(tmp_path):
    env = Environment()
    err = io.StringIO()
    assert is_directory(str(tmp_path / "missing"), env, err) is False
    assert env.status == 1
    assert err.getvalue() == ""


def test_is_directory_regular_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    env = Environment(status=7)
    assert is_directory(str(target), env, io.StringIO()) is False
    assert env.status == 7


def test_search_command_finds_in_path(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _executable(second / "tool")
    env = Environment.from_entries([f"PATH={first}:{second}"])
    assert search_command("tool", env) == f"{second}/tool"


def test_search_command_prefers_earlier_entry(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _executable(first / "tool")
    _executable(second / "tool")
    env = Environment.from_entries([f"PATH={first}:{second}"])
    assert search_command("tool", env) == f"{first}/tool"


def test_search_command_skips_non_executable(tmp_path):
    target = tmp_path / "plain"
    target.write_text("data")
    os.chmod(target, 0o644)
    env = Environment.from_entries([f"PATH={tmp_path}"])
    assert search_command("plain", env) is None


def test_search_command_without_path(tmp_path):
    _executable(tmp_path / "tool")
    assert search_command("tool", Environment()) is None


def test_search_command_with_slash(tmp_path):
    tool = _executable(tmp_path / "tool")
    env = Environment()
    assert search_command(str(tool), env) == str(tool)
    assert search_command(str(tmp_path / "nothing"), env) is None


def test_search_command_empty_command(tmp_path):
    env = Environment.from_entries([f"PATH={tmp_path}"])
    assert search_command("", env) is None