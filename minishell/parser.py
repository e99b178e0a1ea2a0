"""From a command line to a list of commands ready to run."""

from __future__ import annotations

from typing import TextIO

from .commands import build_commands
from .errors import ShellError
from .expand import expand_tokens
from .lexer import tokenize
from .redirections import open_redirections
from .resolve import delete_quotes, resolve_commands
from .state import Command, Shell
from .token_check import check_tokens


def parse(line: str, shell: Shell, stdin: TextIO | None = None) -> list[Command]:
    """Parse ``line`` into pipeline stages with files opened and paths resolved.

    Steps, in order: split into words, expand variables, check the words,
    build the commands, open redirections (here-documents read from
    ``stdin``), find each program, and strip quotes. Any failure raises
    ShellError; files opened for the line are closed first.
    """
    tokens = expand_tokens(tokenize(line), shell)
    check_tokens(tokens)
    commands = build_commands(tokens)
    open_redirections(commands, stdin)
    try:
        resolve_commands(commands, shell)
        delete_quotes(commands)
    except ShellError:
        for command in commands:
            command.close_files()
        raise
    return commands