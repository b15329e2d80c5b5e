"""Expansion of ``$VAR`` and ``$?`` in words and redirection targets."""

from __future__ import annotations

from collections.abc import Iterable

from minismash.environment import Environment
from minismash.models import (
    DOUBLE_QUOTE,
    SINGLE_QUOTE,
    Command,
    RedirectionKind,
)
from minismash.status import ExitStatus


class AmbiguousRedirectError(ValueError):
    """A redirection target expanded to nothing."""

    status = 1

    def __init__(self, target: str) -> None:
        super().__init__(f"{target}: ambigous redirect")
        self.target = target


def _is_key_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def is_start_of_expansion(text: str, index: int) -> bool:
    """True if a ``$`` at ``index`` starts a variable usable inside double quotes."""
    if index + 1 >= len(text) or text[index] != "$":
        return False
    following = text[index + 1]
    return (following.isascii() and following.isalpha()) or following in "_?"


def key_at(text: str) -> str:
    """Return the variable name at the start of ``text``.

    A leading ``$`` is skipped. The name is ``?`` or a run of letters,
    digits and underscores, possibly empty.
    """
    start = 1 if text.startswith("$") else 0
    if text[start:start + 1] == "?":
        return "?"
    end = start
    while end < len(text) and _is_key_char(text[end]):
        end += 1
    return text[start:end]


def lookup(key: str, env: Environment, status: ExitStatus) -> str | None:
    """Return the value of ``key``: the exit status for ``?``, else the variable."""
    if key == "?":
        return str(status)
    return env.get(key)


def _expand_variable(
    text: str, start: int, out: list[str], env: Environment, status: ExitStatus
) -> int:
    """Append the value of the variable at ``start``; return the index after its name."""
    key = key_at(text[start:])
    if key:
        value = lookup(key, env, status)
        if value is not None:
            out.append(value)
    return start + len(key)


def expand(text: str, env: Environment, status: ExitStatus) -> str | None:
    """Expand variables outside single quotes, keeping all quote characters.

    Returns None when the result is empty.
    """
    out: list[str] = []
    length = len(text)
    index = 0
    while index < length:
        char = text[index]
        if char == SINGLE_QUOTE:
            closing = text.find(SINGLE_QUOTE, index + 1)
            end = length if closing == -1 else closing + 1
            out.append(text[index:end])
            index = end
        elif char == DOUBLE_QUOTE:
            out.append(char)
            index += 1
            while index < length and text[index] != DOUBLE_QUOTE:
                if is_start_of_expansion(text, index):
                    index = _expand_variable(text, index + 1, out, env, status)
                    continue
                out.append(text[index])
                index += 1
            if index < length:
                out.append(text[index])
                index += 1
        elif char == "$" and index + 1 < length:
            index = _expand_variable(text, index + 1, out, env, status)
        else:
            out.append(char)
            index += 1
    result = "".join(out)
    return result or None


def expand_commands(
    commands: Iterable[Command], env: Environment, status: ExitStatus
) -> None:
    """Expand names, arguments and redirection targets of ``commands`` in place.

    Arguments that expand to nothing are dropped. Here-doc delimiters are
    left untouched. A redirection target that expands to nothing is reported,
    sets the status to 1 and raises AmbiguousRedirectError.
    """
    for command in commands:
        if command.name is not None:
            command.name = expand(command.name, env, status)
        command.args = [
            expanded
            for expanded in (expand(arg, env, status) for arg in command.args)
            if expanded is not None
        ]
        for redirection in command.redirections:
            if redirection.kind is RedirectionKind.HERE_DOC:
                continue
            if redirection.target is None:
                continue
            expanded = expand(redirection.target, env, status)
            if expanded is None:
                original = redirection.target
                status.fail(1, original, ": ambigous redirect\n")
                redirection.target = None
                raise AmbiguousRedirectError(original)
            redirection.target = expanded