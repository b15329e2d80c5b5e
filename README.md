# minismash

The pieces of a small POSIX-style shell, as a Python library. Each step
of handling a command line is its own module:

- `minismash.checks`: syntax checks on a raw line (balanced quotes, no
  leading pipe, no two operators in a row, no operator with nothing after
  it). `check_line(text)` returns `False` for a blank line, `True` for a
  line that may be run, and raises `SyntaxCheckError` (whose `status` is 2)
  for a malformed one.
- `minismash.lexer`: `tokenize(text)` splits a line into words and the
  operators `<<`, `>>`, `<`, `>` and `|`, keeping quoted sections whole;
  `count_words(text)` counts those tokens.
- `minismash.commands`: `build_commands(tokens)` splits tokens on pipes
  into `Command` objects, each with a name, its arguments and its
  redirections.
- `minismash.expansion`: `expand(text, env, status)` replaces `$NAME` and
  `$?` outside single quotes, returning `None` when the result is empty;
  `expand_commands(commands, env, status)` does this for whole commands and
  raises `AmbiguousRedirectError` when a redirection target expands to
  nothing.
- `minismash.quotes`: `remove_quotes(text)` drops the quotes of every closed
  quoted section; `remove_quotes_in_commands(commands)` applies it to
  commands.
- `minismash.redirection`: `apply_redirections(command, status)` connects a
  command's pipe ends and opens its `<`, `<<`, `>` and `>>` targets onto
  stdin and stdout; `SavedStreams(command)` is a context manager that
  restores stdin and stdout afterwards.
- `minismash.pipes`: `PipeSet(count)` creates OS pipes and `attach(commands)`
  gives each command of a pipeline its read and write ends.
- `minismash.paths`: `resolve_command(command, env)` finds the executable
  for a command through `PATH`, raising `ResolutionError` (with `status`
  127 or 126) when there is none.
- `minismash.builtins`: `echo` (with `-n`), `cd`, `pwd`, `export`, `unset`,
  `env` and `exit`, run through `run_builtin(command, env, status)`. `exit`
  raises `ShellExit` carrying the exit code.

Supporting types: `Environment` (ordered variables) in
`minismash.environment`, `ExitStatus` (the `$?` value) in
`minismash.status`, and `Command`, `Redirection` and `RedirectionKind` in
`minismash.models`.

## Installing

```
pip install .
```

## Example

```python
from minismash.checks import check_line
from minismash.commands import build_commands
from minismash.environment import Environment
from minismash.expansion import expand_commands
from minismash.lexer import tokenize
from minismash.quotes import remove_quotes_in_commands
from minismash.status import ExitStatus

env = Environment.from_entries(["HOME=/home/user", "PATH=/usr/bin:/bin"])
status = ExitStatus()

line = 'echo "$HOME/notes" > out.txt | cat'
check_line(line)                      # True
tokens = tokenize(line)
# ['echo', '"$HOME/notes"', '>', 'out.txt', '|', 'cat']
commands = build_commands(tokens)
expand_commands(commands, env, status)
remove_quotes_in_commands(commands)
print(commands[0].args)               # ['echo', '/home/user/notes']
print(commands[0].redirections[0].describe())   # > out.txt
```

## What it does not do

There is no interactive shell here and no `minismash` command: nothing
reads lines at a prompt, starts external programs, waits for children,
reads here-document bodies from the terminal or handles Ctrl-C. The
modules above check, split, expand and prepare command lines, set up
redirections and pipes, find executables and run the built-in commands;
driving them as a running shell is left to the caller.

## Tests

```
pip install .[test]
pytest
```