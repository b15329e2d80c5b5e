"""Commands the shell runs itself: echo, cd, pwd, export, unset, env, exit."""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Sequence

from minismash.environment import Environment
from minismash.models import Command
from minismash.status import ExitStatus, write_stderr

BUILTINS = frozenset({"echo", "cd", "export", "unset", "exit", "pwd", "env"})
_DIGITS = "0123456789"
_CURRENT_DIR_KEY = "PWD"
_PREVIOUS_DIR_KEY = "OLDPWD"


class ShellExit(Exception):
    """Raised by ``exit``: the shell (or the child running it) must stop."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit {code}")
        self.code = code


def _out(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _is_key_start(char: str) -> bool:
    return char.isascii() and (char.isalpha() or char == "_")


def _is_key_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def is_builtin(name: str | None) -> bool:
    """True if ``name`` is one of the shell's own commands."""
    return name in BUILTINS


def is_n_option(arg: str) -> bool:
    """True for ``-n``, ``-nn``, ``-nnn`` and so on."""
    return len(arg) > 1 and arg[0] == "-" and set(arg[1:]) == {"n"}


def echo(args: Sequence[str], status: ExitStatus) -> None:
    """Print the arguments separated by spaces.

    Leading ``-n`` options are skipped; if the first argument is one, no
    newline is printed.
    """
    index = 0
    while index < len(args) and is_n_option(args[index]):
        index += 1
    text = " ".join(args[index:])
    _out(text if args and is_n_option(args[0]) else f"{text}\n")
    status.code = 0


def print_env(env: Environment, status: ExitStatus) -> None:
    """Print every variable as ``KEY=VALUE``."""
    _out(env.format())
    status.code = 0


def pwd(status: ExitStatus) -> None:
    """Print the current working directory."""
    with contextlib.suppress(OSError):
        _out(f"{os.getcwd()}\n")
    status.code = 0


def _update_directory_vars(env: Environment) -> None:
    previous = env.get(_CURRENT_DIR_KEY)
    had_previous_dir = _PREVIOUS_DIR_KEY in env
    if previous is not None:
        with contextlib.suppress(OSError):
            env.set(_CURRENT_DIR_KEY, os.getcwd())
    if had_previous_dir and previous is not None:
        env.set(_PREVIOUS_DIR_KEY, previous)
    elif had_previous_dir:
        env.unset(_PREVIOUS_DIR_KEY)


def _change_directory(path: str, env: Environment, status: ExitStatus) -> None:
    if not os.access(path, os.F_OK):
        write_stderr("cd: ")
        status.fail(1, path, ": no such file or directory\n")
    elif not os.access(path, os.X_OK):
        write_stderr("cd: ")
        status.fail(1, path, ": permission denied\n")
    else:
        status.code = 0
        with contextlib.suppress(OSError):
            os.chdir(path)
        _update_directory_vars(env)


def cd(args: Sequence[str], env: Environment, status: ExitStatus) -> None:
    """Change directory to ``args[0]`` or to HOME, updating PWD and OLDPWD.

    An empty argument does nothing.
    """
    if len(args) > 1:
        status.fail(1, "cd", ": too many arguments\n")
        return
    if args:
        if args[0]:
            _change_directory(args[0], env, status)
        return
    home = env.get("HOME")
    if home is None:
        status.fail(1, "cd", ": HOME not set\n")
        return
    _change_directory(home, env, status)


def is_valid_key(text: str) -> bool:
    """True if the part of ``text`` before ``=`` is a valid variable name."""
    if not text or not _is_key_start(text[0]):
        return False
    key = text.partition("=")[0]
    return all(_is_key_char(char) for char in key[1:])


def parse_assignment(text: str) -> tuple[str, str] | None:
    """Split ``KEY=VALUE``; return None when there is no ``=``."""
    index = text.find("=") if text and _is_key_start(text[0]) else 0
    if index == -1 or text[index:index + 1] != "=":
        return None
    return text[:index], text[index + 1:]


def export(args: Sequence[str], env: Environment, status: ExitStatus) -> None:
    """Set each ``KEY=VALUE`` argument; report invalid names with status 1."""
    status.code = 0
    for arg in args:
        if not is_valid_key(arg):
            write_stderr("export: '")
            write_stderr(arg)
            write_stderr("': not a valid identifier\n")
            status.code = 1
            continue
        assignment = parse_assignment(arg)
        if assignment is not None:
            env.set(*assignment)


def unset(args: Sequence[str], env: Environment) -> None:
    """Remove each named variable."""
    for key in args:
        env.unset(key)


def is_number(text: str) -> bool:
    """True if ``text`` is digits, optionally after one ``-``."""
    digits = text[1:] if text.startswith("-") else text
    return all(char in _DIGITS for char in digits)


def exit_shell(args: Sequence[str], command_count: int, status: ExitStatus) -> None:
    """Leave the shell by raising ShellExit.

    A numeric argument from 0 to 255 becomes the exit code; otherwise the
    current status is used. Two or more numeric arguments are an error and
    the shell keeps running.
    """
    if command_count == 1:
        _out("exit\n")
    if args:
        first = args[0]
        if is_number(first):
            if len(args) > 1:
                status.fail(1, "exit", ": too many arguments\n")
                return
            number = int(first) if first not in ("", "-") else 0
            if 0 <= number <= 255:
                status.code = number
                raise ShellExit(number)
        else:
            write_stderr("exit: ")
            status.fail(1, first, ": numeric argument required\n")
    raise ShellExit(status.code)


def run_builtin(
    command: Command, env: Environment, status: ExitStatus, command_count: int = 1
) -> None:
    """Run the builtin named by ``command``."""
    args = command.args[1:]
    name = command.name
    if name == "echo":
        echo(args, status)
    elif name == "env":
        print_env(env, status)
    elif name == "pwd":
        pwd(status)
    elif name == "cd":
        cd(args, env, status)
    elif name == "export":
        export(args, env, status)
    elif name == "unset":
        unset(args, env)
    elif name == "exit":
        exit_shell(args, command_count, status)