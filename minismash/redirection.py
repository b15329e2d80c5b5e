"""Applying redirections and pipe ends to the standard streams."""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Sequence
from types import TracebackType

from minismash.models import Command, Redirection, RedirectionKind
from minismash.status import ExitStatus

STDIN = 0
STDOUT = 1
_FILE_MODE = 0o644

_OPEN_FLAGS = {
    RedirectionKind.INPUT: os.O_RDONLY,
    RedirectionKind.HERE_DOC: os.O_RDONLY,
    RedirectionKind.OUTPUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    RedirectionKind.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}


def has_input(redirections: Sequence[Redirection]) -> bool:
    """True if some redirection is ``<`` or ``<<``."""
    return any(redirection.is_input() for redirection in redirections)


def has_output(redirections: Sequence[Redirection]) -> bool:
    """True if some redirection is ``>`` or ``>>``."""
    return any(redirection.is_output() for redirection in redirections)


def last_input_index(redirections: Sequence[Redirection]) -> int:
    """Index of the last input redirection, or -1."""
    indexes = [i for i, redir in enumerate(redirections) if redir.is_input()]
    return indexes[-1] if indexes else -1


def last_output_index(redirections: Sequence[Redirection]) -> int:
    """Index of the last output redirection, or -1."""
    indexes = [i for i, redir in enumerate(redirections) if redir.is_output()]
    return indexes[-1] if indexes else -1


def _replace_stream(fd: int, target_fd: int) -> None:
    if target_fd == STDOUT:
        sys.stdout.flush()
    os.dup2(fd, target_fd)


def apply_redirection(redirection: Redirection, is_last: bool, status: ExitStatus) -> None:
    """Open the target of ``redirection`` and, if ``is_last``, put it in place.

    Every target is opened so that output files get created; only the last
    input and the last output replace stdin and stdout. A here-doc file is
    removed once opened. On failure the error is reported, the status is set
    to 1 and the OSError is raised again.
    """
    target = redirection.target
    if target is None:
        status.fail(1, "(null)", ": No such file or directory\n")
        raise FileNotFoundError("redirection has no target")
    try:
        fd = os.open(target, _OPEN_FLAGS[redirection.kind], _FILE_MODE)
    except OSError as error:
        status.fail(1, target, f": {error.strerror}\n")
        if redirection.kind is RedirectionKind.HERE_DOC:
            with contextlib.suppress(OSError):
                os.unlink(target)
        raise
    try:
        if is_last:
            _replace_stream(fd, STDIN if redirection.is_input() else STDOUT)
    finally:
        os.close(fd)
        if redirection.kind is RedirectionKind.HERE_DOC:
            with contextlib.suppress(OSError):
                os.unlink(target)


def redirect_pipe(command: Command) -> None:
    """Connect the command's pipe ends, unless a redirection takes their place.

    Every pipe of the pipeline is then closed.
    """
    if not has_input(command.redirections) and command.pipe_in >= 0:
        _replace_stream(command.pipe_in, STDIN)
    if not has_output(command.redirections) and command.pipe_out >= 0:
        _replace_stream(command.pipe_out, STDOUT)
    if command.pipe_count > 0 and command.pipes is not None:
        command.pipes.close()


def apply_redirections(command: Command, status: ExitStatus) -> None:
    """Set up pipes then every redirection of ``command``, in order.

    Stops at the first redirection that fails, raising its OSError.
    """
    redirect_pipe(command)
    last_in = last_input_index(command.redirections)
    last_out = last_output_index(command.redirections)
    for index, redirection in enumerate(command.redirections):
        apply_redirection(redirection, index in (last_in, last_out), status)


class SavedStreams:
    """Keep copies of stdin and stdout while a command redirects them.

    Only the streams the command redirects are saved; they are put back on
    exit.
    """

    def __init__(self, command: Command) -> None:
        self.command = command

    def __enter__(self) -> SavedStreams:
        if has_input(self.command.redirections):
            self.command.saved_in = os.dup(STDIN)
        if has_output(self.command.redirections):
            sys.stdout.flush()
            self.command.saved_out = os.dup(STDOUT)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self.command.saved_in != -1:
            os.dup2(self.command.saved_in, STDIN)
            os.close(self.command.saved_in)
            self.command.saved_in = -1
        if self.command.saved_out != -1:
            sys.stdout.flush()
            os.dup2(self.command.saved_out, STDOUT)
            os.close(self.command.saved_out)
            self.command.saved_out = -1
        return False