"""Running a syntax tree: commands, pipes, subshells and logical operators."""

from __future__ import annotations

import io
import os
import signal
import subprocess
import sys
import threading
from contextlib import ExitStack, contextmanager
from typing import IO, Iterator, Optional, TextIO, Union

from minihell.ast import AstNode, Command, NodeType
from minihell.builtins import ShellExit, is_builtin, run_builtin
from minihell.environment import Environment
from minihell.errors import print_error
from minihell.expander import expand_arguments, expand_variables
from minihell.pathsearch import is_directory, search_command
from minihell.quoting import remove_first_layer_quotes, strip_argument_quotes
from minihell.redirections import (
    RedirectionError,
    heredoc_input,
    open_input,
    open_output,
    prepare_heredocs,
)
from minihell.wildcards import expand_line

Stream = Union[int, IO[bytes], None]


def _fileno(stream: Stream, default: int) -> int:
    if stream is None:
        return default
    if isinstance(stream, int):
        return stream
    return stream.fileno()


def _copy_env(env: Environment) -> Environment:
    copy = Environment(status=env.status)
    for name in env:
        copy.set(name, env.get(name))
    return copy


def _status_from_returncode(returncode: int) -> int:
    if returncode >= 0:
        return returncode
    signum = -returncode
    if signum == signal.SIGINT:
        return 130
    if signum == signal.SIGQUIT:
        return 131
    return signum


@contextmanager
def _preserved_cwd() -> Iterator[None]:
    """Restore the working directory afterwards, as a forked child would leave it."""
    try:
        saved: Optional[str] = os.getcwd()
    except OSError:
        saved = None
    try:
        yield
    finally:
        if saved is not None:
            try:
                os.chdir(saved)
            except OSError:
                pass


class Executor:
    """Executes syntax trees against an environment.

    ``stdin`` and ``stdout`` are file descriptors (or objects with ``fileno``)
    used when a call does not name its own; errors go to ``err``. Heredoc
    text is read from ``source`` with prompts written to ``prompt``.
    """

    def __init__(
        self,
        env: Optional[Environment] = None,
        *,
        stdin: Stream = 0,
        stdout: Stream = 1,
        err: Optional[TextIO] = None,
        source: Optional[TextIO] = None,
        prompt: Optional[TextIO] = None,
    ) -> None:
        if env is None:
            env = Environment.from_entries(f"{k}={v}" for k, v in os.environ.items())
        self.env = env
        self.stdin = _fileno(stdin, 0)
        self.stdout = _fileno(stdout, 1)
        self.err = err if err is not None else sys.stderr
        self.source = source
        self.prompt = prompt

    def _fork(self) -> "Executor":
        return Executor(
            _copy_env(self.env),
            stdin=self.stdin,
            stdout=self.stdout,
            err=self.err,
            source=self.source,
            prompt=self.prompt,
        )

    def _report(self, *parts: str) -> None:
        print_error(*parts, file=self.err)

    def run(self, root: Optional[AstNode]) -> int:
        """Collect every heredoc of the tree, then execute it."""
        try:
            prepare_heredocs(root, self.env, self.source, self.prompt)
        except RedirectionError as exc:
            self._report(exc.message)
            self.env.status = 1
            return 1
        return self.execute(root)

    def execute(self, node: Optional[AstNode], stdin: Stream = None, stdout: Stream = None) -> int:
        """Execute one node and return its result."""
        if node is None:
            return 1
        if node.type is NodeType.COMMAND:
            return self.execute_command(node, stdin, stdout)
        if node.type is NodeType.PIPE:
            return 0 if self.execute_pipe(node.left, node.right, stdin, stdout) == 0 else 1
        if node.type is NodeType.AND:
            if self.execute(node.left, stdin, stdout) == 0:
                return self.execute(node.right, stdin, stdout)
            return 0
        if node.type is NodeType.OR:
            if self.execute(node.left, stdin, stdout) == 1:
                return self.execute(node.right, stdin, stdout)
            return 0
        if node.type is NodeType.SUB:
            return self.execute_subshell(node, stdin, stdout)
        return 0

    def _redirect(
        self,
        cmd: Command,
        stack: ExitStack,
        stdin_fd: int,
        stdout_fd: int,
        *,
        heredoc: bool,
    ) -> tuple[int, int]:
        if heredoc:
            handle = heredoc_input(cmd)
            if handle is not None:
                stack.enter_context(handle)
                stdin_fd = handle.fileno()
        if cmd.outputs:
            out = open_output(cmd.outputs, cmd.append)
            if out is not None:
                stack.enter_context(out)
                stdout_fd = out.fileno()
        if cmd.inputs:
            inp = open_input(cmd.inputs)
            if inp is not None:
                stack.enter_context(inp)
                stdin_fd = inp.fileno()
        return stdin_fd, stdout_fd

    def execute_command(self, node: AstNode, stdin: Stream = None, stdout: Stream = None) -> int:
        """Expand and run a simple command, builtin or external."""
        stdin_fd = _fileno(stdin, self.stdin)
        stdout_fd = _fileno(stdout, self.stdout)
        cmd = node.cmd if node.cmd is not None else Command()
        cmd.args = expand_line(cmd.args)
        words = None if cmd.args is None else [w for w in cmd.args.split(" ") if w]
        args = expand_arguments(words, self.env)
        cmd.args = expand_variables(cmd.args, self.env)
        if args is None:
            with ExitStack() as stack:
                try:
                    self._redirect(cmd, stack, stdin_fd, stdout_fd, heredoc=False)
                except RedirectionError as exc:
                    self._report(exc.message)
            return 1
        if not args:
            return 1
        args = strip_argument_quotes(args)
        args[0] = remove_first_layer_quotes(args[0])
        if is_builtin(args[0]):
            return self._run_builtin(cmd, args, stdin_fd, stdout_fd)
        if is_directory(args[0], self.env, self.err):
            return 126
        status = self._run_program(cmd, args, stdin_fd, stdout_fd)
        self.env.status = status
        return status

    def _run_builtin(self, cmd: Command, args: list[str], stdin_fd: int, stdout_fd: int) -> int:
        with ExitStack() as stack:
            try:
                _, target = self._redirect(cmd, stack, stdin_fd, stdout_fd, heredoc=False)
            except RedirectionError as exc:
                self._report(exc.message)
                self.env.status = 1
                return 1
            buffer = io.StringIO()
            try:
                ret = run_builtin(args, cmd.args, self.env, buffer, self.err)
            finally:
                self._emit(target, buffer.getvalue())
        self.env.status = ret
        return ret

    def _emit(self, fd: int, text: str) -> None:
        data = text.encode()
        if not data:
            return
        if fd == 1:
            sys.stdout.flush()
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]

    def _check_local(self, path: str) -> Union[str, int]:
        if not os.path.exists(path):
            self._report(path, ": No such file or directory")
            return 127
        if not os.access(path, os.X_OK):
            self._report(path, ": Permission denied")
            return 126
        return path

    def _resolve(self, name: str, found: Optional[str]) -> Union[str, int]:
        if found is not None:
            return found
        if name.startswith("./"):
            return self._check_local(name)
        if self.env.get("PATH") is None:
            local = "./" + name
            if os.path.exists(local):
                return self._check_local(local)
            self._report(name, ": No such file or directory")
            return 127
        self._report(name, ": command not found")
        return 127

    def _child_env(self) -> dict[str, str]:
        return {name: self.env.get(name) or "" for name in self.env}

    def _run_program(self, cmd: Command, args: list[str], stdin_fd: int, stdout_fd: int) -> int:
        found = search_command(args[0], self.env)
        with ExitStack() as stack:
            try:
                in_fd, out_fd = self._redirect(cmd, stack, stdin_fd, stdout_fd, heredoc=True)
            except RedirectionError as exc:
                self._report(exc.message)
                return 1
            executable = self._resolve(args[0], found)
            if isinstance(executable, int):
                return executable
            sys.stdout.flush()
            self.err.flush()
            try:
                proc = subprocess.Popen(
                    args,
                    executable=executable,
                    stdin=in_fd,
                    stdout=out_fd,
                    env=self._child_env(),
                )
            except (OSError, ValueError):
                self._report("execve")
                return 126
        return _status_from_returncode(proc.wait())

    def execute_pipe(
        self,
        left: Optional[AstNode],
        right: Optional[AstNode],
        stdin: Stream = None,
        stdout: Stream = None,
    ) -> int:
        """Run both sides concurrently, each with its own copy of the environment."""
        stdin_fd = _fileno(stdin, self.stdin)
        stdout_fd = _fileno(stdout, self.stdout)
        try:
            read_fd, write_fd = os.pipe()
        except OSError:
            self._report("pipe")
            return 1
        left_exec = self._fork()
        right_exec = self._fork()

        def run_left() -> None:
            try:
                left_exec.execute(left, stdin_fd, write_fd)
            except (ShellExit, OSError):
                pass
            finally:
                os.close(write_fd)

        with _preserved_cwd():
            thread = threading.Thread(target=run_left, daemon=True)
            thread.start()
            try:
                right_exec.execute(right, read_fd, stdout_fd)
            except (ShellExit, OSError):
                pass
            finally:
                os.close(read_fd)
            thread.join()
        return 0

    def execute_subshell(self, node: AstNode, stdin: Stream = None, stdout: Stream = None) -> int:
        """Run a parenthesised group in a copy of the environment."""
        stdin_fd = _fileno(stdin, self.stdin)
        stdout_fd = _fileno(stdout, self.stdout)
        child = self._fork()
        with _preserved_cwd(), ExitStack() as stack:
            try:
                redi = node.redi
                if redi is not None:
                    if redi.inputs:
                        inp = open_input(redi.inputs)
                        if inp is not None:
                            stack.enter_context(inp)
                            stdin_fd = inp.fileno()
                    if redi.outputs:
                        out = open_output(redi.outputs, redi.append)
                        if out is not None:
                            stack.enter_context(out)
                            stdout_fd = out.fileno()
                    if redi.heredocs:
                        doc = heredoc_input(Command(heredocs=redi.heredocs))
                        if doc is not None:
                            stack.enter_context(doc)
                            stdin_fd = doc.fileno()
            except RedirectionError as exc:
                self._report(exc.message)
                status = 1
            else:
                try:
                    status = child.execute(node.left, stdin_fd, stdout_fd)
                except ShellExit as exc:
                    status = exc.status
        status &= 0xFF
        self.env.status = status
        return status