"""Syntax checks run on a raw command line before it is tokenized."""

from __future__ import annotations

from minismash.models import DOUBLE_QUOTE, SINGLE_QUOTE

OPERATORS = ("<<", ">>", "<", ">", "|")
_SINGLE_OPERATORS = "><|"


class SyntaxCheckError(ValueError):
    """A command line was rejected by the syntax checks."""

    status = 2


def is_double_redirection(text: str, index: int) -> bool:
    """True if ``>>`` or ``<<`` starts at ``index``."""
    return text[index:index + 2] in (">>", "<<")


def is_single_operator(text: str, index: int) -> bool:
    """True if the character at ``index`` is ``>``, ``<`` or ``|``."""
    return 0 <= index < len(text) and text[index] in _SINGLE_OPERATORS


def is_start_of_operator(operator: str, text: str, index: int) -> bool:
    """True if ``operator`` occurs in ``text`` at ``index``."""
    return text.startswith(operator, index)


def _skip_quoted(text: str, index: int, quote: str) -> tuple[int, bool]:
    """Skip the quoted section opening at ``index``.

    Returns the position after the closing quote and whether one was found;
    an unclosed quote runs to the end of the text.
    """
    closing = text.find(quote, index + 1)
    if closing == -1:
        return len(text), False
    return closing + 1, True


def _skip_spaces(text: str, index: int) -> int:
    return len(text) - len(text[index:].lstrip(" "))


def _operator_length(text: str, index: int) -> int:
    for operator in OPERATORS:
        if text.startswith(operator, index):
            return len(operator)
    return 0


def quote_count_is_even(quote: str, other_quote: str, text: str) -> bool:
    """True if every ``quote`` outside ``other_quote`` sections is paired."""
    index = 0
    count = 0
    while index < len(text):
        char = text[index]
        if char == other_quote:
            index, _ = _skip_quoted(text, index, other_quote)
        elif char == quote:
            index, closed = _skip_quoted(text, index, quote)
            count += 2 if closed else 1
        else:
            index += 1
    return count % 2 == 0


def quotes_are_valid(text: str) -> bool:
    """True if both single and double quotes are balanced."""
    return quote_count_is_even(
        SINGLE_QUOTE, DOUBLE_QUOTE, text
    ) and quote_count_is_even(DOUBLE_QUOTE, SINGLE_QUOTE, text)


def consecutive_operators(text: str) -> bool:
    """True if two operators follow each other with only spaces between.

    A pipe followed by a redirection is allowed; quoted sections are skipped.
    """
    length = len(text)
    index = 0
    while index < length:
        for quote in (DOUBLE_QUOTE, SINGLE_QUOTE):
            if index < length and text[index] == quote:
                index, _ = _skip_quoted(text, index, quote)
        if index < length and text[index] == "|":
            following = _skip_spaces(text, index + 1)
            if following < length and text[following] == "|":
                return True
            index = following
        elif operator_length := _operator_length(text, index):
            following = _skip_spaces(text, index + operator_length)
            if _operator_length(text, following):
                return True
            index = following
        elif index < length:
            index += 1
    return False


def _has_empty_after(operator: str, text: str) -> bool:
    index = 0
    while index < len(text):
        if text.startswith(operator, index):
            index += len(operator)
            if not text[index:].strip(" "):
                return True
            continue
        index += 1
    return False


def after_operators_is_empty(text: str) -> bool:
    """True if some operator is followed only by spaces up to the end."""
    return any(_has_empty_after(operator, text) for operator in OPERATORS)


def empty_before_pipe(text: str) -> bool:
    """True if the line starts with a pipe, ignoring leading spaces."""
    return text.lstrip(" ").startswith("|")


def operators_are_valid(text: str) -> bool:
    """True if the operators of the line are well placed."""
    return not (
        empty_before_pipe(text)
        or consecutive_operators(text)
        or after_operators_is_empty(text)
    )


def contains_only_point(text: str) -> bool:
    """True if, spaces aside, the line is a single ``.``."""
    return text.replace(" ", "") == "."


def contains_only_spaces(text: str) -> bool:
    """True if the line holds nothing but spaces (or nothing at all)."""
    return not text.strip(" ")


def check_line(text: str) -> bool:
    """Check a raw command line.

    Returns False when the line is blank and there is nothing to run, True
    when it may be run, and raises SyntaxCheckError when it is malformed.
    """
    if contains_only_spaces(text):
        return False
    if contains_only_point(text):
        raise SyntaxCheckError("filename argument required")
    if not quotes_are_valid(text):
        raise SyntaxCheckError("quotes invalid")
    if not operators_are_valid(text):
        raise SyntaxCheckError("operators invalid")
    return True