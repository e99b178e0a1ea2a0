"""Shell-wide state and the per-command record built by the parser."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import IO, Union

from .errors import MissingVariableError

FileLike = Union[IO, int, None]

PROMPT_SUFFIX = "@minishell $ "
GUEST_PROMPT = "guest" + PROMPT_SUFFIX


@dataclass
class Command:
    """One stage of a pipeline.

    ``infile`` and ``outfile`` are open files (or raw descriptors) for the
    stage's redirections; ``None`` means the inherited stdin or stdout.
    """

    tokens: list[str] = field(default_factory=list)
    index: int = 0
    full_cmd: list[str] = field(default_factory=list)
    full_path: str | None = None
    infile: FileLike = None
    outfile: FileLike = None
    infile_name: str | None = None
    outfile_name: str | None = None
    here_doc: bool = False
    append: bool = False
    is_builtin: bool = False

    def close_files(self) -> None:
        """Close any redirection files this command still holds."""
        self.infile = _close(self.infile, keep=0)
        self.outfile = _close(self.outfile, keep=1)


def _close(handle: FileLike, keep: int) -> None:
    if handle is None:
        return None
    if isinstance(handle, int):
        if handle != keep:
            try:
                os.close(handle)
            except OSError:
                pass
    else:
        handle.close()
    return None


class Shell:
    """The environment, prompt and last exit status of a running shell."""

    def __init__(self, envp: Mapping[str, str] | Iterable[str] | None = None) -> None:
        if envp is None:
            envp = os.environ
        if isinstance(envp, Mapping):
            self.envp: list[str] = [f"{key}={value}" for key, value in envp.items()]
        else:
            self.envp = [str(entry) for entry in envp]
        self.prompt: str = ""
        self.status: int = 0

    def find_var(self, prefix: str) -> int | None:
        """Index of the first environment entry starting with ``prefix``."""
        return next(
            (i for i, entry in enumerate(self.envp) if entry.startswith(prefix)),
            None,
        )

    def lookup(self, prefix: str) -> str:
        """Text following ``prefix`` in the first entry that starts with it.

        Raises MissingVariableError when no entry matches.
        """
        index = self.find_var(prefix)
        if index is None:
            raise MissingVariableError(prefix)
        return self.envp[index][len(prefix):]

    def get(self, name: str) -> str | None:
        """Value of the variable called exactly ``name``, or None."""
        prefix = name + "="
        for entry in self.envp:
            if entry.startswith(prefix):
                return entry[len(prefix):]
        return None

    def set(self, name: str, value: str) -> None:
        """Replace the variable ``name`` in place, or append it if absent."""
        prefix = name + "="
        new_entry = prefix + value
        for i, entry in enumerate(self.envp):
            if entry.startswith(prefix):
                self.envp[i] = new_entry
                return
        self.envp.append(new_entry)

    def build_prompt(self) -> str:
        """Build ``USER@minishell $ `` (or the guest prompt) and store it."""
        try:
            user = self.lookup("USER=")
        except MissingVariableError as exc:
            print(exc.message, file=sys.stderr)
            self.prompt = GUEST_PROMPT
        else:
            self.prompt = user + PROMPT_SUFFIX
        return self.prompt