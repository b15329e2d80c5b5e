"""Data types describing a parsed command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"
HERE_DOC_PREFIX = ".nRuucnTJX07KI45MgLYviuCjeD1XxLsCjRYv3md9"


def _show(value: str | None) -> str:
    return "(null)" if value is None else value


class RedirectionKind(Enum):
    """The four redirection operators."""

    INPUT = "<"
    HERE_DOC = "<<"
    OUTPUT = ">"
    APPEND = ">>"

    @classmethod
    def from_token(cls, token: str) -> RedirectionKind | None:
        """Return the kind named by ``token``, or None if it is not a redirection."""
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass
class Redirection:
    """A redirection operator and its target (a file name or here-doc delimiter)."""

    kind: RedirectionKind
    target: str | None

    def is_input(self) -> bool:
        """True for ``<`` and ``<<``."""
        return self.kind in (RedirectionKind.INPUT, RedirectionKind.HERE_DOC)

    def is_output(self) -> bool:
        """True for ``>`` and ``>>``."""
        return self.kind in (RedirectionKind.OUTPUT, RedirectionKind.APPEND)

    def describe(self) -> str:
        return f"{self.kind.value} {_show(self.target)}"


@dataclass
class Command:
    """One simple command of a pipeline."""

    name: str | None = None
    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)
    pipe_in: int = -1
    pipe_out: int = -1
    pipes: Any = None
    pipe_count: int = 0
    saved_in: int = -1
    saved_out: int = -1

    def describe(self) -> str:
        """Return a multi-line summary of the command for debugging."""
        lines = [f"name :{_show(self.name)}", "args_exec :"]
        lines += [f"~~~[{i}] :{arg}" for i, arg in enumerate(self.args)]
        lines.append("operators_in && operator_out :")
        lines += [
            f"~~~[{i}] :{redir.describe()}"
            for i, redir in enumerate(self.redirections)
        ]
        lines.append(f"pipe_in :{self.pipe_in}")
        lines.append(f"pipe_out :{self.pipe_out}")
        lines.append(f"nb_pipes :{self.pipe_count}")
        lines.append("pipes :(NULL)" if self.pipes is None else "pipes :OK")
        return "\n".join(lines) + "\n"