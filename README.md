# minishell

A small interactive command shell. It reads a line, splits it into words,
expands variables, builds a pipeline of commands and runs it.

## Features

- Words are separated by spaces. Operators (`|`, `<`, `<<`, `>`, `>>`) must
  stand as words of their own, with spaces around them.
- Single and double quotes keep spaces inside a word. Quotes are removed only
  when they surround a whole word (`"a b"` becomes `a b`); a word that opens a
  quote without closing it, or closes one it did not open, is an error.
- `$NAME` is replaced from the shell's environment; a word in single quotes
  is left alone. A word containing `$?` is replaced whole by the last exit
  status. Referring to a variable that is not set reports
  `Couldn't find NAME variable` and drops the line.
- Pipelines joined with `|`.
- Redirections: `<` (input file), `<<` (here-document, read from standard
  input up to a line equal to the delimiter), `>` (truncate) and `>>`
  (append). Output files are created with mode 0644.
- Builtins: `echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset`, `exit`.
  A lone builtin runs in the shell itself; a builtin inside a pipeline runs
  on a copy of the shell's state, so changes it makes do not last.
- External commands are run directly when the name is itself an executable
  path, and are otherwise searched for in `PATH`.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minishell
```

It takes no arguments and reads lines from the terminal. The prompt shows
the current user, taken from `USER`, or `guest` when it is not set:

```
alice@minishell $ echo hello | cat > out.txt
alice@minishell $ cat < out.txt
hello
alice@minishell $ export GREETING=hi
alice@minishell $ echo $GREETING
hi
alice@minishell $ exit 3
```

End of input (Ctrl-D) prints `exit` and leaves the shell with status 0.
Ctrl-C discards the current line and shows a fresh prompt; Ctrl-\ is ignored.

### Builtin details

- `cd` with no argument goes to `HOME`. `PWD` and `OLDPWD` are updated only
  when they are already set.
- `export NAME=value` sets or replaces a variable; `export` alone lists the
  environment as `declare -x NAME=value` lines. An argument without `=` is
  ignored.
- `unset NAME...` removes variables; a name that is not set is reported.
- `exit N` leaves with `N` modulo 256. With a non-numeric argument it reports
  `exit: numeric argument required`, sets the status to 255 and stays in the
  shell.

## Errors and exit status

Problems are reported on standard error and the line is dropped. Among them:
unclosed quotes, a `|` at the start of a line or right after another `|`, an
empty pipeline stage, a redirection at the start of a line or right after
another, two input or two output redirections on one command, and files that
cannot be opened (status 126). A command that cannot be found, or any
non-builtin (or `env`) when `PATH` is unset or empty, sets the status to 127.
Starting `minishell` from inside the shell is refused.

## What it does not do

There are no command separators such as `;` or `&&`, no subshells, no
globbing, no job control, and no running of script files: such characters
are passed through as ordinary text. Tabs do not separate words.

## Using it as a library

The pieces can be driven from Python:

```python
from minishell.state import Shell
from minishell.cli import handle_line

shell = Shell({"PATH": "/usr/bin:/bin", "USER": "alice"})
handle_line(shell, "echo hello")
```

`minishell.parser.parse` turns a line into `Command` objects and
`minishell.executor.execute` runs them. Errors are raised as
`minishell.errors.ShellError`, and `exit` raises `minishell.errors.ShellExit`.

## Running the tests

```
pip install .[test]
pytest
```