"""Splitting a command line into words and operators."""

from __future__ import annotations

from collections.abc import Iterator

from minismash.checks import is_double_redirection, is_single_operator
from minismash.models import DOUBLE_QUOTE, SINGLE_QUOTE


def _word_end(text: str, start: int) -> int:
    """Return the position just past the word starting at ``start``.

    A word stops at a space or an operator; quoted sections, which may hold
    both, are kept whole. An unclosed quote runs to the end of the text.
    """
    end = start
    length = len(text)
    while end < length and text[end] != " " and not is_single_operator(text, end):
        char = text[end]
        if char in (SINGLE_QUOTE, DOUBLE_QUOTE):
            closing = text.find(char, end + 1)
            end = length if closing == -1 else closing + 1
        else:
            end += 1
    return end


def _iter_tokens(text: str) -> Iterator[str]:
    index = 0
    length = len(text)
    while index < length:
        if text[index] == " ":
            index += 1
        elif is_double_redirection(text, index):
            yield text[index:index + 2]
            index += 2
        elif is_single_operator(text, index):
            yield text[index]
            index += 1
        else:
            end = _word_end(text, index)
            yield text[index:end]
            index = end


def tokenize(text: str) -> list[str]:
    """Split ``text`` into words and the operators ``<< >> < > |``.

    Quotes are left in the words; they are removed after expansion.
    """
    return list(_iter_tokens(text))


def count_words(text: str) -> int:
    """Return the number of tokens in ``text``."""
    return sum(1 for _ in _iter_tokens(text))