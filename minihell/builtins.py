"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import re
import sys
from typing import Optional, Sequence, TextIO

from minihell.environment import Environment, is_valid_var_name
from minihell.errors import print_error
from minihell.quoting import strip_outer_quotes

BUILTINS = frozenset(
    {"echo", "cd", "pwd", "export", "unset", "env", "exit", "correction"}
)

_NUMERIC = re.compile(r"\s*[+-]?\d+\s*")


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def _out(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stdout


def _err(stream: Optional[TextIO]) -> TextIO:
    return stream if stream is not None else sys.stderr


def is_builtin(name: str) -> bool:
    """Whether ``name`` is handled by the shell itself."""
    return name in BUILTINS


def builtin_correction(out: Optional[TextIO] = None) -> int:
    """Print the easter-egg line."""
    _out(out).write("HHHH: ser awa t9awd ser\n")
    return 0


def _skip_n_options(text: str, start: int) -> tuple[int, bool]:
    newline = True
    while start < len(text) and text[start] == "-":
        j = start + 1
        if j >= len(text) or text[j] != "n":
            break
        while j < len(text) and text[j] == "n":
            j += 1
        if j < len(text) and text[j] != " ":
            break
        newline = False
        start = j
        while start < len(text) and text[start] == " ":
            start += 1
    return start, newline


def builtin_echo(raw_args: Optional[str], out: Optional[TextIO] = None) -> int:
    """Print the words after ``echo`` from the raw command line, quotes dropped."""
    text = raw_args or ""
    start = min(5, len(text))
    while start < len(text) and text[start] == " ":
        start += 1
    start, newline = _skip_n_options(text, start)
    body = "".join(ch for ch in text[start:] if ch not in ("'", '"'))
    _out(out).write(body + ("\n" if newline else ""))
    return 0


def strip_quotes(text: str) -> str:
    """Strip matching outer quote pairs repeatedly."""
    while len(text) >= 2 and text[0] in ("'", '"') and text[-1] == text[0]:
        text = text[1:-1]
    return text


def print_env_export(
    env: Environment, args: Sequence[str], out: Optional[TextIO] = None
) -> None:
    """List variables in ``declare -x`` form when ``export`` has no arguments."""
    if len(args) > 1:
        return
    stream = _out(out)
    for name in env:
        value = env.get(name)
        if value is not None:
            stream.write(f'declare -x {name}="{value}"\n')
        else:
            stream.write(f"declare -x {name}\n")


def _export_one(arg: str, env: Environment, err: Optional[TextIO]) -> int:
    if arg.startswith("="):
        print_error("minishell: export: ", arg, ": not a valid identifier", file=_err(err))
        return 1
    name, eq, value = arg.partition("=")
    if not is_valid_var_name(name):
        print_error("minishell: export: ", name, ": not a valid identifier", file=_err(err))
        return 1
    if eq:
        env.set(name, strip_quotes(value))
    elif name not in env:
        env.set(name, None)
    return 0


def builtin_export(
    args: Sequence[str],
    env: Environment,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Set or declare variables; stops at the first invalid argument."""
    print_env_export(env, args, out)
    for arg in args[1:]:
        if _export_one(arg, env, err) != 0:
            return 1
    return 0


def builtin_unset(
    args: Sequence[str], env: Environment, err: Optional[TextIO] = None
) -> int:
    """Remove variables; stops at the first invalid name."""
    if len(env) == 0:
        return 1
    for name in args[1:]:
        if not is_valid_var_name(name):
            print_error("unset: ", name, ": not a valid identifier", file=_err(err))
            return 1
        env.unset(name)
    return 0


def builtin_env(env: Environment, out: Optional[TextIO] = None) -> int:
    """Print variables that have a non-empty value."""
    stream = _out(out)
    for name in env:
        value = env.get(name)
        if value:
            stream.write(f"{name}={value}\n")
    return 0


def builtin_pwd(out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Print the working directory."""
    try:
        _out(out).write(os.getcwd() + "\n")
    except OSError:
        print_error("minihell: pwd", file=_err(err))
    return 0


def _chdir(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError:
        return False
    return True


def _cd_home(env: Environment, err: TextIO) -> int:
    if "HOME" not in env:
        print_error("cd: HOME not set", file=err)
        return 1
    home = strip_outer_quotes(env.get("HOME") or "")
    if not _chdir(home):
        print_error("cd: ", home, ": No such file or directory", file=err)
        return 1
    return 0


def _cd_oldpwd(env: Environment, err: TextIO) -> int:
    if "OLDPWD" not in env:
        print_error("bash: cd: OLDPWD not set", file=err)
        return 1
    oldpwd = env.get("OLDPWD") or ""
    if not _chdir(oldpwd):
        print_error("bash: cd: ", oldpwd, ": No such file or directory", file=err)
        return 1
    return 0


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def builtin_cd(
    args: Sequence[str], env: Environment, err: Optional[TextIO] = None
) -> int:
    """Change directory (``~`` or none for HOME, ``-`` for OLDPWD) and update PWD."""
    stream = _err(err)
    oldpwd = _current_dir()
    target = args[1] if len(args) > 1 else None
    if target is None or target == "~":
        ret = _cd_home(env, stream)
    elif target == "-":
        ret = _cd_oldpwd(env, stream)
    elif not _chdir(target):
        print_error("bash: cd: ", target, ": No such file or directory", file=stream)
        return 1
    else:
        ret = 0
    _export_one(f"OLDPWD={oldpwd}", env, stream)
    _export_one(f"PWD={_current_dir()}", env, stream)
    return ret


def builtin_exit(
    args: Sequence[str],
    env: Environment,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Leave the shell by raising ShellExit; too many arguments returns 1."""
    _out(out).write("exit\n")
    if len(args) <= 1:
        raise ShellExit(env.status)
    if len(args) == 2:
        if not _NUMERIC.fullmatch(args[1]):
            print_error("exit: ", args[1], ": numeric argument required", file=_err(err))
            raise ShellExit(255)
        raise ShellExit(int(args[1]) % 256)
    print_error("exit: ", "too many arguments", file=_err(err))
    return 1


def run_builtin(
    args: Sequence[str],
    raw_args: Optional[str],
    env: Environment,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    name = args[0] if args else ""
    if name == "echo":
        return builtin_echo(raw_args, out)
    if name == "cd":
        return builtin_cd(args, env, err)
    if name == "pwd":
        return builtin_pwd(out, err)
    if name == "export":
        return builtin_export(args, env, out, err)
    if name == "unset":
        return builtin_unset(args, env, err)
    if name == "env":
        return builtin_env(env, out)
    if name == "exit":
        return builtin_exit(args, env, out, err)
    if name == "correction":
        return builtin_correction(out)
    return 1