"""Core of a small Bourne-style shell: environment, expansion, wildcards, builtins, redirections and syntax-tree execution."""

__version__ = "0.1.0"