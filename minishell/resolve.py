"""Locating the programs a parsed line names, and final clean-up of its words."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .errors import ShellError
from .state import Command, Shell

BUILTINS = frozenset({"cd", "pwd", "export", "env", "echo", "unset", "exit"})
NESTED_SHELL_NAMES = frozenset({"minishell", "./minishell"})

_PATH_PREFIX = "PATH="


def is_builtin(name: str) -> bool:
    """True when ``name`` is a command the shell runs itself."""
    return name in BUILTINS


def mark_builtins(commands: list[Command]) -> list[Command]:
    """Flag every command whose name is a builtin."""
    for command in commands:
        if is_builtin(command.full_cmd[0]):
            command.is_builtin = True
    return commands


def check_path_env(commands: list[Command], shell: Shell) -> bool:
    """Report whether PATH is set and non-empty.

    Without a usable PATH only builtins other than ``env`` may run; any
    other command raises ShellError (status 127).
    """
    index = shell.find_var(_PATH_PREFIX)
    available = index is not None and len(shell.envp[index]) > len(_PATH_PREFIX)
    if not available:
        for command in commands:
            if not command.is_builtin or command.full_cmd[0] == "env":
                raise ShellError("PATH not avaiable for cmd", 127)
    return available


def path_dirs(shell: Shell) -> list[str]:
    """Directories listed in PATH, empty entries dropped.

    Raises MissingVariableError when PATH is not set.
    """
    return [entry for entry in shell.lookup(_PATH_PREFIX).split(":") if entry]


def find_in_path(name: str, dirs: Iterable[str]) -> str | None:
    """First ``dir/name`` that is executable, or None."""
    for directory in dirs:
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def resolve_commands(commands: list[Command], shell: Shell) -> list[Command]:
    """Mark builtins and give every other command the path it runs from.

    A name that is itself executable is used as it stands; otherwise it is
    searched for in PATH and replaced by the full path. Raises ShellError
    (status 127) for a command that cannot be found.
    """
    mark_builtins(commands)
    dirs = path_dirs(shell) if check_path_env(commands, shell) else []
    for command in commands:
        if command.is_builtin:
            continue
        name = command.full_cmd[0]
        if os.access(name, os.X_OK):
            command.full_path = name
            continue
        found = find_in_path(name, dirs)
        if found is None:
            raise ShellError("Incorrect command", 127)
        command.full_cmd[0] = found
        command.full_path = found
    return commands


def _strip(word: str, quote: str) -> str:
    opens = word.startswith(quote)
    closes = word.endswith(quote)
    if opens != closes:
        raise ShellError("Invalid quotes", 2)
    return word.strip(quote) if opens else word


def strip_quotes(word: str) -> str:
    """Remove the single, then double, quotes surrounding a word.

    Raises ShellError (status 2) when a word opens a quote it does not
    close, or closes one it did not open.
    """
    return _strip(_strip(word, "'"), '"')


def forbid_nested_shell(commands: list[Command]) -> None:
    """Refuse to start this shell inside itself."""
    for command in commands:
        if command.full_cmd[0] in NESTED_SHELL_NAMES:
            raise ShellError("Cannot open a mishell inside another minishell", 2)


def delete_quotes(commands: list[Command]) -> list[Command]:
    """Strip the quotes from every argument, then check for a nested shell."""
    for command in commands:
        command.full_cmd = [strip_quotes(word) for word in command.full_cmd]
    forbid_nested_shell(commands)
    return commands