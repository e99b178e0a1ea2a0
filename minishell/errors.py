"""Exceptions raised while reading, parsing and running command lines."""

from __future__ import annotations


class ShellError(Exception):
    """A recoverable error: the current line is dropped and the prompt returns.

    ``status`` is the exit status the shell records for the failed line, or
    ``None`` when the error leaves the previous status untouched.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


class UnsupportedCharacterError(ShellError):
    """The line holds a character this shell does not interpret."""

    def __init__(self, char: str) -> None:
        super().__init__(f"This minishell doesn't support this character: {char}")
        self.char = char


class MissingVariableError(ShellError):
    """An environment variable that the line needs is not set."""

    def __init__(self, name: str) -> None:
        self.name = name.strip("=")
        super().__init__(f"Couldn't find {self.name} variable")


class ShellExit(Exception):
    """Ends the shell with ``status``, after printing ``message`` if any."""

    def __init__(self, status: int = 0, message: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.message = message