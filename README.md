# minihell

The core of a small Bourne-style shell, as a Python library. It takes a
syntax tree of commands, pipes, `&&`, `||` and parenthesised groups and
runs it: expanding variables and `*` patterns, stripping quotes, handling
redirections and here-documents, running builtins itself and starting
other programs with `subprocess`.

## Modules

- `minihell.ast`: `TokenType`, `NodeType`, `Token`, `Redirection`,
  `Command`, `SubshellRedirections` and `AstNode`, the data classes a tree
  is built from.
- `minihell.environment`: `Environment`, an ordered table of variables plus
  the last exit status (`status`). Build one with
  `Environment.from_entries` from `NAME=value` strings; use `get`, `set`,
  `unset`, `to_envp` and `status_text` (the text of `$?`). A value of
  `None` marks a name exported without a value. `parse_entry` splits one
  entry; `is_valid_var_name` checks identifiers.
- `minihell.expander`: `expand_variables` expands `$NAME` and `$?` outside
  single quotes (unknown names expand to nothing, an empty result gives
  `None`); `split_quotes` splits on spaces outside quotes;
  `expand_arguments` expands an argument list and re-splits it into words.
- `minihell.wildcards`: `match_pattern` matches `*` patterns;
  `expand_wildcard`, `expand_token` and `expand_line` replace patterns
  with the sorted matching names of a directory (`.` by default).
- `minihell.quoting`: `remove_first_layer_quotes`, `remove_quotes`,
  `remove_all_quotes`, `strip_outer_quotes`, `strip_argument_quotes`,
  `get_first_word` and `is_quoted_delimiter`.
- `minihell.builtins`: `echo`, `cd`, `pwd`, `export`, `unset`, `env`,
  `exit` and `correction` as `builtin_*` functions, dispatched by
  `run_builtin` and recognised by `is_builtin`. Output and error streams
  can be passed in. `exit` raises `ShellExit` carrying the status.
- `minihell.redirections`: `open_input` and `open_output` open every file
  of a redirection list and return the last; `read_heredoc`,
  `collect_heredoc` and `prepare_heredocs` read here-documents into
  temporary files; `heredoc_input` opens the collected file. Failures
  raise `RedirectionError`.
- `minihell.pathsearch`: `search_command` finds an executable on `PATH`;
  `join_path` and `is_directory` help it.
- `minihell.executor`: `Executor` runs a tree. `run` collects
  here-documents first and then calls `execute`, which dispatches to
  `execute_command`, `execute_pipe` and `execute_subshell`. The two sides
  of a pipe run concurrently (the left side in a thread), each with a copy
  of the environment; a subshell runs in a copy of the environment and
  the working directory is restored afterwards. External programs run as
  child processes.
- `minihell.errors`: `format_error` and `print_error` write messages with
  a `bash: ` prefix, to standard error by default.
- `minihell.debug`: `format_tokens`, `format_ast_tree`, `print_ast_tree`
  and their helpers draw tokens and trees as text.

## Example

```python
from minihell.environment import Environment
from minihell.expander import expand_variables
from minihell.quoting import remove_first_layer_quotes
from minihell.wildcards import match_pattern

env = Environment.from_entries(["HOME=/home/user", "SHELL=/bin/sh"])
print(expand_variables("cd $HOME", env))   # cd /home/user
print(expand_variables("'$HOME'", env))    # '$HOME'  (no expansion in single quotes)

print(match_pattern("*.py", "setup.py"))   # True
print(remove_first_layer_quotes('e"ch"o')) # echo

env.set("EDITOR", "vi")
print(env.to_envp())  # ['HOME=/home/user', 'SHELL=/bin/sh', 'EDITOR=vi']
```

Running a tree:

```python
from minihell.ast import AstNode, Command, NodeType
from minihell.environment import Environment
from minihell.executor import Executor

env = Environment.from_entries(["PATH=/usr/bin:/bin"])
tree = AstNode(NodeType.COMMAND, cmd=Command(args="echo hello"))
status = Executor(env).run(tree)
```

## What it does not do

There is no tokenizer or parser and no interactive prompt or command-line
program: the package does not read shell command lines. Callers build the
`AstNode` tree themselves and hand it to `Executor`. Signal handling for
an interactive session is not provided either.

## Requirements

Python 3.10 or later on a POSIX system. No dependencies outside the
standard library; tests use pytest (`pip install .[test]`).