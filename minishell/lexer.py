"""Splitting a command line into words."""

from __future__ import annotations

from .errors import ShellError

_BLANKS = frozenset(" \t\n\v\f\r")
_QUOTES = frozenset("'\"")
_SEPARATOR = " "


def is_blank_input(line: str) -> bool:
    """True when the line is empty or holds only whitespace."""
    return all(ch in _BLANKS for ch in line)


def count_tokens(line: str) -> int:
    """Number of words on the line.

    Words are separated by spaces outside quotes. Raises ShellError
    (status 2) when a quote is left open.
    """
    count = 0
    in_word = False
    quote: str | None = None
    for ch in line:
        if quote is not None:
            if ch == quote:
                quote = None
            continue
        if ch == _SEPARATOR:
            in_word = False
            continue
        if not in_word:
            count += 1
            in_word = True
        if ch in _QUOTES:
            quote = ch
    if quote is not None:
        raise ShellError("Unclosed quotes", 2)
    return count


def split_tokens(line: str) -> list[str]:
    """Split the line on spaces outside quotes, keeping the quotes in the words.

    Raises ShellError (status 2) when a quote is left open.
    """
    tokens: list[str] = []
    current: list[str] = []
    squote = dquote = False
    for ch in line:
        if ch == _SEPARATOR and not squote and not dquote:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)
        if ch == "'" and not dquote:
            squote = not squote
        elif ch == '"' and not squote:
            dquote = not dquote
    if current:
        tokens.append("".join(current))
    if squote or dquote:
        raise ShellError("Invalid quotes", 2)
    return tokens


def tokenize(line: str) -> list[str]:
    """Check the line's quoting and return its words."""
    count = count_tokens(line)
    return split_tokens(line)[:count]