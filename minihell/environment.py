"""The shell's variable table and last exit status."""

from __future__ import annotations

import string
from typing import Iterable, Iterator, Optional

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_REST = frozenset(string.ascii_letters + string.digits + "_")


def parse_entry(entry: str) -> tuple[str, str]:
    """Split ``NAME=value`` at the first '='; without one the value is empty."""
    name, _, value = entry.partition("=")
    return name, value


def is_valid_var_name(name: Optional[str]) -> bool:
    """Whether ``name`` is a valid shell identifier."""
    if not name or name[0] not in _NAME_START:
        return False
    return all(ch in _NAME_REST for ch in name[1:])


class Environment:
    """Ordered shell variables; a value of None marks a name exported without one."""

    def __init__(self, status: int = 0) -> None:
        self._vars: dict[str, Optional[str]] = {}
        self.status = status

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> "Environment":
        """Build an environment from ``NAME=value`` strings."""
        env = cls()
        for entry in entries:
            name, value = parse_entry(entry)
            env.set(name, value)
        return env

    def get(self, name: str) -> Optional[str]:
        """Return the value of ``name``, or None when unset or valueless."""
        return self._vars.get(name)

    def set(self, name: str, value: Optional[str]) -> None:
        """Set ``name``; an existing variable keeps its position."""
        self._vars[name] = value

    def unset(self, name: str) -> None:
        """Remove ``name`` if present."""
        self._vars.pop(name, None)

    def to_envp(self) -> list[str]:
        """Render the variables as ``NAME=value`` strings."""
        return [f"{name}={value or ''}" for name, value in self._vars.items()]

    def status_text(self) -> str:
        """The last exit status as text, for ``$?``."""
        return str(self.status)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)