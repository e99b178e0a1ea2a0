"""The interactive read-parse-run loop and the command entry point."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable

from .errors import ShellError, ShellExit
from .executor import execute
from .lexer import is_blank_input
from .parser import parse
from .state import Shell

try:
    import readline
except ImportError:  # pragma: no cover - platform without readline
    readline = None


def _remember(line: str) -> None:
    if readline is not None and line:
        readline.add_history(line)


def handle_line(shell: Shell, line: str) -> int:
    """Parse and run one line; return the shell's status afterwards.

    Blank lines are ignored. Errors are reported on stderr and end the
    line; ShellExit from ``exit`` is passed on.
    """
    if is_blank_input(line):
        return shell.status
    _remember(line)
    try:
        commands = parse(line, shell)
        execute(commands, shell)
    except ShellError as exc:
        sys.stdout.flush()
        sys.stderr.write(exc.message + "\n")
        sys.stderr.flush()
        if exc.status is not None:
            shell.status = exc.status
    return shell.status


def repl(shell: Shell, read_line: Callable[[str], str | None]) -> int:
    """Read lines with ``read_line(prompt)`` until end of input or ``exit``.

    ``read_line`` returns None at end of input. Returns the status the
    shell ends with.
    """
    while True:
        try:
            line = read_line(shell.prompt)
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            sys.stdout.flush()
            continue
        if line is None:
            sys.stdout.write("exit\n")
            sys.stdout.flush()
            return 0
        try:
            handle_line(shell, line)
        except ShellExit as exc:
            if exc.message:
                sys.stderr.write(exc.message)
            return exc.status
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            sys.stdout.flush()


def _read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _install_signals() -> dict[int, object]:
    wanted: dict[int, object] = {signal.SIGINT: signal.default_int_handler}
    if hasattr(signal, "SIGQUIT"):
        wanted[signal.SIGQUIT] = signal.SIG_IGN
    previous: dict[int, object] = {}
    for signum, handler in wanted.items():
        try:
            previous[signum] = signal.signal(signum, handler)
        except ValueError:
            pass
    return previous


def _restore_signals(previous: dict[int, object]) -> None:
    for signum, handler in previous.items():
        if handler is None:
            continue
        try:
            signal.signal(signum, handler)
        except ValueError:
            pass


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on the current environment."""
    shell = Shell(os.environ)
    shell.build_prompt()
    previous = _install_signals()
    try:
        return repl(shell, _read_line)
    finally:
        _restore_signals(previous)


if __name__ == "__main__":
    sys.exit(main())