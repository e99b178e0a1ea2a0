"""Replacing ``$NAME`` and ``$?`` inside words."""

from __future__ import annotations

import re

from .state import Shell

# A variable reference runs from the first "$" up to whitespace or a double quote.
_REFERENCE = re.compile(r'\$[^\t\n\v\f\r "]*')


def _substitute(token: str, shell: Shell) -> str:
    match = _REFERENCE.search(token)
    name = match.group().strip("$")
    value = shell.lookup(name).strip("=")
    return token[: match.start()] + value + token[match.end():]


def expand_token(token: str, shell: Shell) -> str:
    """Expand the variable references in one word.

    A word quoted in single quotes is left alone. A word holding ``$?`` is
    replaced whole by the last exit status. Otherwise references are
    replaced one at a time, first to last. Raises MissingVariableError when
    a referenced variable is not set.
    """
    if token.startswith("'") and token.endswith("'"):
        return token
    if "$?" in token:
        return str(shell.status)
    if "$" in token and len(token) > 1:
        token = _substitute(token, shell)
        if "$" in token and len(token) > 1:
            return expand_token(token, shell)
    return token


def expand_tokens(tokens: list[str], shell: Shell) -> list[str]:
    """Expand every word of the line."""
    return [expand_token(token, shell) for token in tokens]