"""Commands the shell runs itself: cd, pwd, export, env, echo, unset, exit."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from .errors import ShellExit
from .state import Command, Shell


def _finish(shell: Shell | None, status: int) -> int:
    if shell is not None:
        shell.status = status
    return status


def echo(args: list[str], out: TextIO) -> int:
    """Write the arguments separated by spaces; a leading ``-n`` drops the newline."""
    newline = True
    if args and args[0] == "-n":
        newline = False
        args = args[1:]
    out.write(" ".join(args))
    if newline:
        out.write("\n")
    return 0


def _replace_existing(shell: Shell, name: str, value: str) -> None:
    prefix = name + "="
    for i, entry in enumerate(shell.envp):
        if entry.startswith(prefix):
            shell.envp[i] = prefix + value
            return


def cd(args: list[str], shell: Shell, err: TextIO) -> int:
    """Change directory to the first argument, or to HOME without one.

    OLDPWD and PWD are updated only where they already exist.
    """
    try:
        oldpwd: str | None = os.getcwd()
    except OSError:
        oldpwd = None
    target = args[0] if args else shell.get("HOME")
    if target is None:
        err.write("cd: HOME not set\n")
        return _finish(shell, 1)
    try:
        os.chdir(target)
    except OSError:
        err.write(f"cd: {target}: No such file or directory\n")
        return _finish(shell, 1)
    if oldpwd is not None:
        _replace_existing(shell, "OLDPWD", oldpwd)
    try:
        _replace_existing(shell, "PWD", os.getcwd())
    except OSError:
        pass
    return _finish(shell, 0)


def pwd(out: TextIO, err: TextIO) -> int:
    """Write the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"pwd: {os.strerror(exc.errno or 0)}\n")
        return 1
    out.write(cwd + "\n")
    return 0


def env(shell: Shell, out: TextIO) -> int:
    """Write every environment entry, one per line."""
    if shell.envp is None:
        return _finish(shell, 1)
    for entry in shell.envp:
        out.write(entry + "\n")
    return _finish(shell, 0)


def export(arg: str | None, shell: Shell, out: TextIO) -> int:
    """Set ``NAME=value``; without an argument, list the environment.

    An argument without ``=`` is accepted and ignored.
    """
    if arg is None:
        for entry in shell.envp:
            out.write(f"declare -x {entry}\n")
        return _finish(shell, 0)
    name, sep, value = arg.partition("=")
    if sep:
        shell.set(name, value)
    return _finish(shell, 0)


def _unset_one(var: str, shell: Shell, err: TextIO) -> int:
    if "=" in var:
        return 1
    prefix = var + "="
    for i, entry in enumerate(shell.envp):
        if entry.startswith(prefix):
            del shell.envp[i]
            return 0
    err.write(f"unset: `{var}': not found\n")
    return 1


def unset(args: list[str], shell: Shell, err: TextIO) -> int:
    """Remove each named variable; the status is that of the last name."""
    if not args:
        return _finish(shell, 1)
    status = 1
    for var in args:
        status = _unset_one(var, shell, err)
    return _finish(shell, status)


def _is_numeric(text: str) -> bool:
    digits = text[1:] if text[:1] in ("-", "+") else text
    return all("0" <= ch <= "9" for ch in digits)


def _to_int(text: str) -> int:
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("+-")
    return sign * int(digits) if digits else 0


def exit_builtin(args: list[str], shell: Shell, err: TextIO) -> int:
    """Raise ShellExit with the given status (0 by default).

    A non-numeric argument is refused: the status is set to 255 and 1 is
    returned without leaving the shell.
    """
    err.write("exit\n")
    if args and not _is_numeric(args[0]):
        err.write("exit: numeric argument required\n")
        shell.status = 255
        return 1
    status = _to_int(args[0]) % 256 if args else 0
    shell.status = status
    raise ShellExit(status, "")


def run_builtin(
    command: Command,
    shell: Shell,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Run ``command`` as a builtin and return its status.

    An empty command returns 0; a name that is not a builtin returns 1.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if not command.full_cmd:
        return 0
    name, args = command.full_cmd[0], command.full_cmd[1:]
    if name == "cd":
        return cd(args, shell, err)
    if name == "pwd":
        return _finish(shell, pwd(out, err))
    if name == "export":
        return export(args[0] if args else None, shell, out)
    if name == "env":
        return env(shell, out)
    if name == "echo":
        return _finish(shell, echo(args, out))
    if name == "unset":
        return unset(args, shell, err)
    if name == "exit":
        return exit_builtin(args, shell, err)
    return 1