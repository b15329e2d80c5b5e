import pytest

from minismash.environment import Environment, split_entry


@pytest.mark.parametrize(
    "entry, expected",
    [
        ("PATH=/bin:/usr/bin", ("PATH", "/bin:/usr/bin")),
        ("A=b=c", ("A", "b=c")),
        ("EMPTY=", ("EMPTY", "")),
        ("NOEQUAL", ("NOEQUAL", "")),
    ],
)
def test_split_entry(entry, expected):
    assert split_entry(entry) == expected


def test_from_entries_and_get():
    env = Environment.from_entries(["HOME=/home/user", "SHELL=/bin/sh"])
    assert env.get("HOME") == "/home/user"
    assert env.get("SHELL") == "/bin/sh"
    assert env.get("MISSING") is None
    assert len(env) == 2


def test_to_entries_round_trip():
    entries = ["A=1", "B=two", "C=x=y"]
    env = Environment.from_entries(entries)
    assert env.to_entries() == entries
    assert Environment.from_entries(env.to_entries()).to_entries() == entries


def test_set_replaces_in_place():
    env = Environment.from_entries(["A=1", "B=2", "C=3"])
    env.set("B", "changed")
    assert list(env) == ["A", "B", "C"]
    assert env.get("B") == "changed"


def test_set_new_key_appends():
    env = Environment.from_entries(["A=1"])
    env.set("Z", "26")
    assert list(env) == ["A", "Z"]
    assert "Z" in env


def test_unset_removes_and_tolerates_missing():
    env = Environment.from_entries(["A=1", "B=2"])
    env.unset("A")
    env.unset("NOPE")
    assert "A" not in env
    assert list(env) == ["B"]


def test_unset_then_set_moves_to_end():
    env = Environment.from_entries(["A=1", "B=2"])
    env.unset("A")
    env.set("A", "1")
    assert list(env) == ["B", "A"]


def test_format_lists_each_variable_on_a_line():
    env = Environment.from_entries(["A=1", "B="])
    assert env.format() == "A=1\nB=\n"


def test_empty_environment():
    env = Environment.from_entries([])
    assert len(env) == 0
    assert env.format() == ""
    assert env.to_entries() == []