import pytest

from minismash.environment import Environment
from minismash.expansion import (
    AmbiguousRedirectError,
    expand,
    expand_commands,
    is_start_of_expansion,
    key_at,
    lookup,
)
from minismash.models import Command, Redirection, RedirectionKind
from minismash.status import ExitStatus


@pytest.fixture
def env():
    return Environment({"HOME": "/home/user", "USER": "alice", "EMPTY": ""})


@pytest.fixture
def status():
    return ExitStatus(42)


@pytest.mark.parametrize(
    "text, index, expected",
    [
        ("$HOME", 0, True),
        ("$_x", 0, True),
        ("$?", 0, True),
        ("$1", 0, False),
        ("$", 0, False),
        ("$ ", 0, False),
        ("a$b", 1, True),
        ("ab", 0, False),
    ],
)
def test_is_start_of_expansion(text, index, expected):
    assert is_start_of_expansion(text, index) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("USER rest", "USER"),
        ("$USER", "USER"),
        ("?abc", "?"),
        ("$?", "?"),
        ("a_b1-c", "a_b1"),
        ("-x", ""),
        ("", ""),
    ],
)
def test_key_at(text, expected):
    assert key_at(text) == expected


def test_lookup_variable(env, status):
    assert lookup("USER", env, status) == "alice"


def test_lookup_status(env, status):
    assert lookup("?", env, status) == "42"


def test_lookup_missing(env, status):
    assert lookup("NOPE", env, status) is None


def test_expand_plain_text_unchanged(env, status):
    assert expand("hello", env, status) == "hello"


def test_expand_variable(env, status):
    assert expand("$HOME", env, status) == "/home/user"


def test_expand_variable_inside_word(env, status):
    assert expand("x$USER.y", env, status) == "xalice.y"


def test_expand_status(env, status):
    assert expand("$?", env, status) == str(status.code)


def test_expand_missing_variable_gives_none(env, status):
    assert expand("$NOPE", env, status) is None


def test_expand_empty_value_gives_none(env, status):
    assert expand("$EMPTY", env, status) is None


def test_expand_missing_variable_keeps_rest(env, status):
    assert expand("a$NOPE", env, status) == "a"


def test_trailing_dollar_kept(env, status):
    assert expand("$", env, status) == "$"
    assert expand("cost$", env, status) == "cost$"


def test_dollar_before_non_key_is_dropped(env, status):
    assert expand("$/tmp", env, status) == "/tmp"


def test_single_quotes_prevent_expansion(env, status):
    assert expand("'$HOME'", env, status) == "'$HOME'"


def test_double_quotes_expand_and_keep_quotes(env, status):
    assert expand('"$HOME"', env, status) == '"/home/user"'


def test_digit_after_dollar_kept_in_double_quotes(env, status):
    assert expand('"$1"', env, status) == '"$1"'


def test_double_quotes_with_missing_variable_keep_quotes(env, status):
    assert expand('"$NOPE"', env, status) == '""'


def test_values_are_not_expanded_again(status):
    environment = Environment({"X": "$Y", "Y": "z"})
    assert expand("$X", environment, status) == "$Y"


def test_mixed_quotes(env, status):
    assert expand("'$USER'\"$USER\"$USER", env, status) == "'$USER'\"alice\"alice"


def test_expand_commands_name_and_args(env, status):
    command = Command(name="$USER", args=["$USER", "$NOPE", "$HOME"])
    expand_commands([command], env, status)
    assert command.name == "alice"
    assert command.args == ["alice", "/home/user"]


def test_expand_commands_name_to_none(env, status):
    command = Command(name="$NOPE", args=["$NOPE"])
    expand_commands([command], env, status)
    assert command.name is None
    assert command.args == []


def test_expand_commands_redirection_target(env, status):
    command = Command(
        name="cat",
        args=["cat"],
        redirections=[Redirection(RedirectionKind.OUTPUT, "$USER.txt")],
    )
    expand_commands([command], env, status)
    assert command.redirections[0].target == "alice.txt"


def test_expand_commands_here_doc_delimiter_untouched(env, status):
    command = Command(
        name="cat",
        args=["cat"],
        redirections=[Redirection(RedirectionKind.HERE_DOC, "$USER")],
    )
    expand_commands([command], env, status)
    assert command.redirections[0].target == "$USER"


def test_ambiguous_redirect(env, status, capsys):
    command = Command(
        name="cat",
        args=["cat"],
        redirections=[Redirection(RedirectionKind.INPUT, "$NOPE")],
    )
    with pytest.raises(AmbiguousRedirectError) as info:
        expand_commands([command], env, status)
    assert info.value.target == "$NOPE"
    assert status.code == 1
    assert command.redirections[0].target is None
    assert capsys.readouterr().err == "$NOPE: ambigous redirect\n"


def test_ambiguous_redirect_stops_later_commands(env, status):
    first = Command(
        name="cat",
        args=["cat"],
        redirections=[Redirection(RedirectionKind.APPEND, "$NOPE")],
    )
    second = Command(name="$USER", args=["$USER"])
    with pytest.raises(AmbiguousRedirectError):
        expand_commands([first, second], env, status)
    assert second.name == "$USER"
    assert second.args == ["$USER"]