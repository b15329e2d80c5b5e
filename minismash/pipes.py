"""The pipes that join the commands of a pipeline."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Sequence
from types import TracebackType

from minismash.models import Command


class PipeSet:
    """A fixed number of OS pipes, each a ``(read_fd, write_fd)`` pair."""

    def __init__(self, count: int) -> None:
        self._pairs: list[tuple[int, int]] = []
        self._closed = False
        try:
            for _ in range(max(count, 0)):
                self._pairs.append(os.pipe())
        except OSError:
            self.close()
            raise

    @property
    def pairs(self) -> tuple[tuple[int, int], ...]:
        """The ``(read_fd, write_fd)`` pairs, in pipeline order."""
        return tuple(self._pairs)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._pairs)

    def attach(self, commands: Sequence[Command]) -> None:
        """Give each command its pipe ends and a reference to this set.

        The first command writes to the first pipe, the last reads from the
        last one, and those in between read from the previous pipe and write
        to their own. A lone command gets no pipe ends.
        """
        count = len(commands)
        for index, command in enumerate(commands):
            command.pipes = self if self._pairs else None
            command.pipe_count = count - 1
            if count > 1 and index == 0:
                command.pipe_in = -1
                command.pipe_out = self._pairs[0][1]
            elif count > 1 and index < count - 1:
                command.pipe_in = self._pairs[index - 1][0]
                command.pipe_out = self._pairs[index][1]
            elif count > 1:
                command.pipe_in = self._pairs[index - 1][0]
                command.pipe_out = -1
            else:
                command.pipe_in = -1
                command.pipe_out = -1

    def close(self) -> None:
        """Close both ends of every pipe. Closing twice does nothing."""
        if self._closed:
            return
        for read_fd, write_fd in self._pairs:
            for fd in (read_fd, write_fd):
                with contextlib.suppress(OSError):
                    os.close(fd)
        self._closed = True

    def __enter__(self) -> PipeSet:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.close()
        return False