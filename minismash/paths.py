"""Finding the executable file that runs a command."""

from __future__ import annotations

import os

from minismash.environment import Environment
from minismash.models import Command

NOT_FOUND_STATUS = 127
NOT_EXECUTABLE_STATUS = 126


class ResolutionError(LookupError):
    """A command could not be turned into a runnable file."""

    def __init__(self, status: int, context: str, reason: str) -> None:
        super().__init__(f"{context}: {reason}")
        self.status = status
        self.context = context
        self.reason = reason


def find_in_path(name: str, path_value: str) -> str | None:
    """Return the first ``dir/name`` that exists for the dirs in ``path_value``.

    Empty entries of ``path_value`` are ignored; an empty name finds nothing.
    """
    if not name:
        return None
    for directory in filter(None, path_value.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK):
            return candidate
    return None


def check_command_path(path: str) -> None:
    """Raise ResolutionError unless ``path`` is an executable file."""
    if not os.access(path, os.F_OK):
        raise ResolutionError(NOT_FOUND_STATUS, path, "No such file or directory")
    if not os.access(path, os.X_OK):
        raise ResolutionError(NOT_EXECUTABLE_STATUS, path, "Permission denied")
    if os.path.isdir(path):
        raise ResolutionError(NOT_EXECUTABLE_STATUS, path, "Is a directory")


def resolve_command(command: Command, env: Environment) -> str | None:
    """Return the path of the file that runs ``command``.

    Returns None for a command with no name. With PATH set, a name holding
    ``/`` is used as it is and any other name is looked up in PATH; without
    PATH the name itself is used. Raises ResolutionError when nothing
    runnable is found.
    """
    name = command.name
    if name is None:
        return None
    path_value = env.get("PATH")
    if path_value is not None:
        if "/" in name:
            check_command_path(name)
            return name
        found = find_in_path(name, path_value)
        if found is None:
            raise ResolutionError(NOT_FOUND_STATUS, name, "Command not found")
        check_command_path(found)
        return found
    check_command_path(name)
    return name