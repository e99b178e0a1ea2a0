import os

import pytest

from minishell.errors import MissingVariableError
from minishell.state import Command, Shell


def test_shell_from_list_copies_entries():
    source = ["A=1", "B=2"]
    shell = Shell(source)
    shell.set("C", "3")
    assert source == ["A=1", "B=2"]
    assert shell.envp == ["A=1", "B=2", "C=3"]


def test_shell_from_mapping():
    shell = Shell({"HOME": "/home/u", "X": "y"})
    assert shell.envp == ["HOME=/home/u", "X=y"]
    assert shell.status == 0


def test_find_var_prefix_match():
    shell = Shell(["HOME=/h", "PATH=/bin"])
    assert shell.find_var("PATH=") == 1
    assert shell.find_var("HO") == 0
    assert shell.find_var("NOPE") is None


def test_lookup_returns_remainder_after_prefix():
    shell = Shell(["HOME=/h", "PATH=/bin:/usr/bin"])
    assert shell.lookup("PATH=") == "/bin:/usr/bin"
    assert shell.lookup("HOME") == "=/h"


def test_lookup_missing_raises():
    with pytest.raises(MissingVariableError) as info:
        Shell(["A=1"]).lookup("USER=")
    assert info.value.name == "USER"


def test_get_requires_exact_name():
    shell = Shell(["HOMEDIR=/x", "HOME=/h"])
    assert shell.get("HOME") == "/h"
    assert shell.get("HOM") is None


def test_set_replaces_in_place():
    shell = Shell(["A=1", "B=2", "C=3"])
    shell.set("B", "new")
    assert shell.envp == ["A=1", "B=new", "C=3"]
    assert shell.get("B") == "new"


def test_build_prompt_with_user():
    shell = Shell(["USER=alice"])
    assert shell.build_prompt() == "alice@minishell $ "
    assert shell.prompt == "alice@minishell $ "


def test_build_prompt_guest(capsys):
    shell = Shell(["HOME=/h"])
    assert shell.build_prompt() == "guest@minishell $ "
    assert "Couldn't find USER variable" in capsys.readouterr().err


def test_close_files_closes_file_objects(tmp_path):
    handle = open(tmp_path / "out.txt", "w")
    command = Command(outfile=handle)
    command.close_files()
    assert handle.closed
    assert command.outfile is None


def test_close_files_closes_descriptors():
    read_fd, write_fd = os.pipe()
    command = Command(infile=read_fd, outfile=write_fd)
    command.close_files()
    assert command.infile is None and command.outfile is None
    with pytest.raises(OSError):
        os.fstat(read_fd)
    with pytest.raises(OSError):
        os.fstat(write_fd)


def test_command_defaults():
    command = Command(tokens=["ls"])
    assert command.full_cmd == []
    assert command.infile is None and command.outfile is None
    assert not command.here_doc and not command.append and not command.is_builtin