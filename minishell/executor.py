"""Running parsed commands: builtins in-process, programs as child processes."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from .builtins import run_builtin
from .errors import ShellError, ShellExit
from .resolve import is_builtin
from .state import Command, FileLike, Shell

_EXEC_FAILURE_STATUS = 1
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@contextmanager
def _text_stream(handle: FileLike, default: TextIO) -> Iterator[TextIO]:
    """A text stream writing to ``handle``, or ``default`` when it is None.

    The underlying file or descriptor is left open.
    """
    if handle is None:
        yield default
        return
    if isinstance(handle, int):
        stream = os.fdopen(handle, "w", encoding=_ENCODING, errors=_ERRORS, closefd=False)
        try:
            yield stream
        finally:
            stream.close()
        return
    wrapper = io.TextIOWrapper(handle, encoding=_ENCODING, errors=_ERRORS, write_through=True)
    try:
        yield wrapper
    finally:
        wrapper.flush()
        wrapper.detach()


def _flush_std() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def _environment(shell: Shell) -> dict[str, str]:
    env: dict[str, str] = {}
    for entry in shell.envp:
        name, sep, value = entry.partition("=")
        if sep:
            env[name] = value
    return env


def _exit_status(returncode: int) -> int:
    # A child ended by a signal has no exit code; its status reads as 0.
    return returncode & 0xFF if returncode >= 0 else 0


def _wait(process: subprocess.Popen) -> int:
    while True:
        try:
            return _exit_status(process.wait())
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            sys.stdout.flush()


def _spawn(command: Command, shell: Shell, stdin: FileLike, stdout: FileLike) -> subprocess.Popen:
    _flush_std()
    return subprocess.Popen(
        command.full_cmd,
        executable=command.full_path or command.full_cmd[0],
        env=_environment(shell),
        stdin=stdin,
        stdout=stdout,
    )


def _report_exec_failure() -> int:
    sys.stderr.write("Command execution failed\n")
    sys.stderr.flush()
    return _EXEC_FAILURE_STATUS


def run_single(command: Command, shell: Shell) -> int:
    """Run one external program with its redirections; return its status."""
    try:
        try:
            process = _spawn(command, shell, command.infile, command.outfile)
        except OSError:
            status = _report_exec_failure()
        else:
            status = _wait(process)
    finally:
        command.close_files()
    shell.status = status
    return status


def _builtin_stage(command: Command, shell: Shell) -> tuple[int, str]:
    """Run a builtin as a pipeline stage, isolated from the shell's state.

    Returns the status and whatever it wrote that is not redirected to a file.
    """
    child = Shell(list(shell.envp))
    child.prompt = shell.prompt
    child.status = shell.status
    try:
        cwd: str | None = os.getcwd()
    except OSError:
        cwd = None
    captured = io.StringIO()
    try:
        with _text_stream(command.outfile, captured) as out:
            status = run_builtin(command, child, out)
    except ShellExit as exc:
        status = exc.status
    finally:
        if cwd is not None:
            try:
                os.chdir(cwd)
            except OSError:
                pass
    return status, captured.getvalue()


def _feed(fd: int, data: bytes) -> None:
    try:
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError:
        pass
    finally:
        os.close(fd)


def run_pipeline(commands: list[Command], shell: Shell) -> int:
    """Run the stages connected by pipes; the status is the last stage's."""
    stages: list[subprocess.Popen | int] = []
    feeders: list[threading.Thread] = []
    previous_read: int | None = None
    try:
        for position, command in enumerate(commands):
            last = position == len(commands) - 1
            next_read: int | None = None
            write_end: int | None = None
            if not last:
                next_read, write_end = os.pipe()
            try:
                if is_builtin(command.full_cmd[0]):
                    status, text = _builtin_stage(command, shell)
                    stages.append(status)
                    if text:
                        if write_end is not None:
                            feeder = threading.Thread(
                                target=_feed,
                                args=(os.dup(write_end), text.encode(_ENCODING, _ERRORS)),
                                daemon=True,
                            )
                            feeder.start()
                            feeders.append(feeder)
                        else:
                            sys.stdout.write(text)
                            sys.stdout.flush()
                else:
                    stdin = command.infile if command.infile is not None else previous_read
                    stdout = command.outfile if command.outfile is not None else write_end
                    try:
                        stages.append(_spawn(command, shell, stdin, stdout))
                    except OSError:
                        stages.append(_report_exec_failure())
            finally:
                if previous_read is not None:
                    os.close(previous_read)
                if write_end is not None:
                    os.close(write_end)
                previous_read = next_read
    finally:
        if previous_read is not None:
            os.close(previous_read)
        for command in commands:
            command.close_files()
    statuses = [stage if isinstance(stage, int) else _wait(stage) for stage in stages]
    for feeder in feeders:
        feeder.join()
    status = statuses[-1] if statuses else 0
    shell.status = status
    return status


def execute(commands: list[Command], shell: Shell) -> int:
    """Run a parsed line and return its status.

    A lone builtin runs in the shell itself; a lone program runs as a child;
    several stages run as a pipeline. Raises ShellError (status 127) when
    there is no command, and lets ShellExit from ``exit`` through.
    """
    try:
        if not commands or not commands[0].full_cmd:
            raise ShellError("Error: No command provided", 127)
        first = commands[0]
        if len(commands) == 1:
            if is_builtin(first.full_cmd[0]):
                with _text_stream(first.outfile, sys.stdout) as out:
                    status = run_builtin(first, shell, out)
                shell.status = status
                return status
            return run_single(first, shell)
        return run_pipeline(commands, shell)
    finally:
        for command in commands:
            command.close_files()