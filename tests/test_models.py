import pytest

from minismash.models import Command, Redirection, RedirectionKind


@pytest.mark.parametrize(
    "token, kind",
    [
        ("<", RedirectionKind.INPUT),
        ("<<", RedirectionKind.HERE_DOC),
        (">", RedirectionKind.OUTPUT),
        (">>", RedirectionKind.APPEND),
    ],
)
def test_from_token_recognises_operators(token, kind):
    assert RedirectionKind.from_token(token) is kind
    assert RedirectionKind.from_token(token).value == token


@pytest.mark.parametrize("token", ["|", "echo", "", "<<<", "> "])
def test_from_token_rejects_others(token):
    assert RedirectionKind.from_token(token) is None


@pytest.mark.parametrize("kind", list(RedirectionKind))
def test_input_and_output_are_exclusive(kind):
    redir = Redirection(kind, "file")
    assert redir.is_input() != redir.is_output()


def test_input_kinds():
    assert Redirection(RedirectionKind.INPUT, "f").is_input()
    assert Redirection(RedirectionKind.HERE_DOC, "EOF").is_input()
    assert Redirection(RedirectionKind.OUTPUT, "f").is_output()
    assert Redirection(RedirectionKind.APPEND, "f").is_output()


def test_redirection_describe():
    assert Redirection(RedirectionKind.APPEND, "log").describe() == ">> log"
    assert Redirection(RedirectionKind.INPUT, None).describe() == "< (null)"


def test_command_defaults():
    cmd = Command()
    assert cmd.name is None
    assert cmd.args == []
    assert cmd.redirections == []
    assert (cmd.pipe_in, cmd.pipe_out, cmd.saved_in, cmd.saved_out) == (-1, -1, -1, -1)
    assert cmd.pipe_count == 0


def test_command_defaults_are_not_shared():
    first = Command()
    second = Command()
    first.args.append("x")
    assert second.args == []


def test_command_describe_lists_fields():
    cmd = Command(
        name="cat",
        args=["cat", "-e"],
        redirections=[Redirection(RedirectionKind.INPUT, "in.txt")],
    )
    lines = cmd.describe().splitlines()
    assert lines[0] == "name :cat"
    assert "~~~[0] :cat" in lines
    assert "~~~[1] :-e" in lines
    assert "~~~[0] :< in.txt" in lines
    assert lines[-1] == "pipes :(NULL)"


def test_command_describe_with_pipes():
    cmd = Command(name=None, pipes=object(), pipe_count=2)
    text = cmd.describe()
    assert text.startswith("name :(null)\n")
    assert "nb_pipes :2\n" in text
    assert text.endswith("pipes :OK\n")