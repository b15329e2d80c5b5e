"""Removal of quote characters once expansion is done."""

from __future__ import annotations

from collections.abc import Iterable

from minismash.models import DOUBLE_QUOTE, SINGLE_QUOTE, Command

_QUOTES = (SINGLE_QUOTE, DOUBLE_QUOTE)


def count_quote_pairs(text: str) -> int:
    """Return the number of closed quoted sections in ``text``.

    A quote opens a section that ends at the next quote of the same kind;
    the other kind of quote inside it is plain text. An unclosed quote is
    not counted.
    """
    count = 0
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            closing = text.find(char, index + 1)
            if closing == -1:
                break
            count += 1
            index = closing + 1
        else:
            index += 1
    return count


def remove_quotes(text: str) -> str:
    """Drop the quotes of every closed quoted section of ``text``.

    An unclosed quote is kept, together with everything after it.
    """
    pieces: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            closing = text.find(char, index + 1)
            if closing == -1:
                pieces.append(text[index:])
                break
            pieces.append(text[index + 1:closing])
            index = closing + 1
        else:
            pieces.append(char)
            index += 1
    return "".join(pieces)


def remove_quotes_in_commands(commands: Iterable[Command]) -> None:
    """Remove quotes from names, arguments and redirection targets in place."""
    for command in commands:
        if command.name is not None:
            command.name = remove_quotes(command.name)
        command.args = [remove_quotes(arg) for arg in command.args]
        for redirection in command.redirections:
            if redirection.target is not None:
                redirection.target = remove_quotes(redirection.target)