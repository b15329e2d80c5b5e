"""Building commands from the tokens of a command line."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from minismash.models import Command, Redirection, RedirectionKind

PIPE = "|"


def _is_redirection_token(token: str) -> bool:
    return token.startswith(("<", ">"))


def _iter_words(tokens: Sequence[str]) -> Iterator[str]:
    """Yield the tokens that are not redirections or redirection targets."""
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if _is_redirection_token(token):
            index += 2
        else:
            yield token
            index += 1


def command_name(tokens: Sequence[str]) -> str | None:
    """Return the first word of a command, or None if it has none."""
    return next(_iter_words(tokens), None)


def command_arguments(tokens: Sequence[str]) -> list[str]:
    """Return every word of a command, its name first."""
    return list(_iter_words(tokens))


def collect_redirections(tokens: Sequence[str]) -> list[Redirection]:
    """Return the redirections of a command with their targets, in order.

    A redirection with nothing after it gets a target of None.
    """
    redirections = []
    index = 0
    while index < len(tokens):
        kind = RedirectionKind.from_token(tokens[index])
        if kind is None:
            index += 1
            continue
        target = tokens[index + 1] if index + 1 < len(tokens) else None
        redirections.append(Redirection(kind, target))
        index += 2
    return redirections


def build_command(tokens: Sequence[str]) -> Command:
    """Build one command from the tokens between two pipes."""
    return Command(
        name=command_name(tokens),
        args=command_arguments(tokens),
        redirections=collect_redirections(tokens),
    )


def build_commands(tokens: Sequence[str]) -> list[Command]:
    """Split ``tokens`` on pipes and build one command per segment."""
    commands = []
    current: list[str] = []
    for token in tokens:
        if token == PIPE:
            commands.append(build_command(current))
            current = []
        else:
            current.append(token)
    if current:
        commands.append(build_command(current))
    return commands