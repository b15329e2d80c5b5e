"""The shell's environment variables, kept in insertion order."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


def split_entry(entry: str) -> tuple[str, str]:
    """Split ``KEY=VALUE`` on the first ``=``; a missing ``=`` gives an empty value."""
    key, _, value = entry.partition("=")
    return key, value


class Environment:
    """An ordered set of environment variables.

    Replacing a variable keeps its position; new variables go to the end.
    """

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._variables: dict[str, str] = dict(variables or {})

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> Environment:
        """Build an environment from ``KEY=VALUE`` strings."""
        env = cls()
        for entry in entries:
            key, value = split_entry(entry)
            env.set(key, value)
        return env

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None if it is not set."""
        return self._variables.get(key)

    def set(self, key: str, value: str) -> None:
        """Set ``key`` to ``value``, replacing any existing value in place."""
        self._variables[key] = value

    def unset(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._variables.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._variables!r})"

    def to_entries(self) -> list[str]:
        """Return the variables as ``KEY=VALUE`` strings, in order."""
        return [f"{key}={value}" for key, value in self._variables.items()]

    def format(self) -> str:
        """Return the listing printed by ``env``: one ``KEY=VALUE`` line each."""
        return "".join(f"{entry}\n" for entry in self.to_entries())