"""Shell exit status tracking and error reporting."""

from __future__ import annotations

import sys
from dataclasses import dataclass


def write_stderr(message: str) -> None:
    """Write ``message`` to standard error immediately."""
    sys.stderr.write(message)
    sys.stderr.flush()


@dataclass
class ExitStatus:
    """The status code of the last command run by the shell."""

    code: int = 0

    def fail(self, code: int, context: str, message: str) -> int:
        """Report ``context`` followed by ``message`` on stderr and record ``code``."""
        write_stderr(context)
        write_stderr(message)
        self.code = code
        return self.code

    def __str__(self) -> str:
        return str(self.code)