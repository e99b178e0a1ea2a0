"""Opening the files and here-documents named by redirections."""

from __future__ import annotations

import os
import sys
import tempfile
from typing import IO, TextIO

from .errors import ShellError
from .state import Command

_OUTFILE_MODE = 0o644


def read_here_doc(delimiter: str, stream: TextIO) -> str:
    """Read lines from ``stream`` up to a line equal to ``delimiter``.

    The delimiter line is consumed but not returned; end of input also
    ends the document.
    """
    end = delimiter + "\n"
    lines = []
    for line in iter(stream.readline, ""):
        if line == end:
            break
        lines.append(line)
    return "".join(lines)


def _create(path: str, flags: int) -> int:
    return os.open(path, flags, _OUTFILE_MODE)


def _open_input(command: Command, stream: TextIO) -> IO[bytes]:
    if command.here_doc:
        document = tempfile.TemporaryFile()
        text = read_here_doc(command.infile_name, stream)
        document.write(text.encode("utf-8", "surrogateescape"))
        document.seek(0)
        return document
    try:
        return open(command.infile_name, "rb")
    except OSError as exc:
        raise ShellError("Couldn't open infile", 126) from exc


def _open_output(command: Command) -> IO[bytes]:
    mode = "ab" if command.append else "wb"
    try:
        return open(command.outfile_name, mode, opener=_create)
    except OSError as exc:
        raise ShellError("Couldn't open outfile", 126) from exc


def open_redirections(commands: list[Command], stdin: TextIO | None = None) -> None:
    """Open every command's input and output files, in pipeline order.

    Here-documents are read from ``stdin`` (the process stdin by default).
    On failure all files opened so far are closed and ShellError is raised.
    """
    stream = sys.stdin if stdin is None else stdin
    try:
        for command in commands:
            if command.infile_name is not None:
                command.infile = _open_input(command, stream)
            if command.outfile_name is not None:
                command.outfile = _open_output(command)
    except ShellError:
        for command in commands:
            command.close_files()
        raise