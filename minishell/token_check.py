"""Checks on the word list before it is split into commands."""

from __future__ import annotations

from .errors import ShellError, UnsupportedCharacterError

# Characters refused outside quotes. None is refused at present; backquotes
# and backslashes inside double quotes are the only quoted candidates.
REFUSED_CHARACTERS: frozenset[str] = frozenset()

_PIPE = "|"
_CHECKED_REDIRECTIONS = frozenset({"<", ">", ">>"})


def check_problem_chars(tokens: list[str]) -> None:
    """Raise UnsupportedCharacterError for a refused character.

    Quoting is tracked across the whole line: nothing inside single quotes
    is checked, and inside double quotes only backquotes and backslashes.
    """
    squote = dquote = False
    for token in tokens:
        for ch in token:
            if ch == '"':
                dquote = not dquote
            if ch == "'":
                squote = not squote
            if squote:
                continue
            if dquote and ch not in "`\\":
                continue
            if ch in REFUSED_CHARACTERS:
                raise UnsupportedCharacterError(ch)


def _well_placed(tokens: list[str], operators: frozenset[str]) -> bool:
    previous = False
    for position, token in enumerate(tokens):
        if token in operators:
            if previous or position == 0:
                return False
            previous = True
        else:
            previous = False
    return True


def check_pipes(tokens: list[str]) -> bool:
    """False when a pipe opens the line or follows another pipe."""
    return _well_placed(tokens, frozenset({_PIPE}))


def check_redirections(tokens: list[str]) -> bool:
    """False when ``<``, ``>`` or ``>>`` opens the line or follows another."""
    return _well_placed(tokens, _CHECKED_REDIRECTIONS)


def check_tokens(tokens: list[str]) -> list[str]:
    """Run every check and return the tokens; raise ShellError on failure."""
    check_problem_chars(tokens)
    if not check_pipes(tokens):
        raise ShellError("Incorrect pipes", 2)
    if not check_redirections(tokens):
        raise ShellError("Incorrect redirections", 2)
    return tokens