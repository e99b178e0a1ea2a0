"""Turning the word list into pipeline stages."""

from __future__ import annotations

from enum import Enum

from .errors import ShellError
from .state import Command


class TokenKind(Enum):
    """What a word stands for within a command."""

    WORD = 1
    PIPE = 2
    TARGET = 3
    INPUT = 4
    HERE_DOC = 5
    OUTPUT = 6
    APPEND = 7


OPERATORS = {
    "|": TokenKind.PIPE,
    "<": TokenKind.INPUT,
    "<<": TokenKind.HERE_DOC,
    ">": TokenKind.OUTPUT,
    ">>": TokenKind.APPEND,
}

_REDIRECTIONS = frozenset(
    {TokenKind.INPUT, TokenKind.HERE_DOC, TokenKind.OUTPUT, TokenKind.APPEND}
)


def split_pipeline(tokens: list[str]) -> list[list[str]]:
    """Split the words at each ``|``; the pipes themselves are dropped."""
    stages: list[list[str]] = [[]]
    for token in tokens:
        if token == "|":
            stages.append([])
        else:
            stages[-1].append(token)
    return stages


def identify_token(token: str, code: TokenKind | None) -> TokenKind:
    """Kind of ``token`` given the kind of the word before it (or None)."""
    if code in _REDIRECTIONS:
        return TokenKind.TARGET
    return OPERATORS.get(token, TokenKind.WORD)


def _assign_redirection(command: Command, target: str, kind: TokenKind) -> None:
    if kind in (TokenKind.INPUT, TokenKind.HERE_DOC):
        if command.infile is not None:
            raise ShellError("Double input redirection", 2)
        command.infile_name = target
        if kind is TokenKind.HERE_DOC:
            command.here_doc = True
    else:
        if command.outfile_name is not None:
            raise ShellError("Double outfile redirection", 2)
        command.outfile_name = target
        if kind is TokenKind.APPEND:
            command.append = True


def fill_command(command: Command) -> Command:
    """Sort the command's words into arguments and redirections."""
    if all(token in OPERATORS for token in command.tokens):
        raise ShellError("There should be at least one command", 127)
    command.full_cmd = []
    previous: TokenKind | None = None
    for position, token in enumerate(command.tokens):
        kind = identify_token(token, previous)
        if position == 0 and kind is not TokenKind.WORD:
            raise ShellError("First token should be a command", 127)
        if kind is TokenKind.PIPE:
            raise ShellError("Incorrect pipe", 2)
        if kind is TokenKind.WORD:
            command.full_cmd.append(token)
        elif kind is TokenKind.TARGET:
            _assign_redirection(command, token, previous)
        previous = kind
    return command


def build_commands(tokens: list[str]) -> list[Command]:
    """Build one filled Command per pipeline stage."""
    commands = [
        Command(tokens=stage, index=index)
        for index, stage in enumerate(split_pipeline(tokens))
    ]
    for command in commands:
        fill_command(command)
    return commands