import pytest

from minishell.cli import handle_line, main, repl
from minishell.errors import ShellExit
from minishell.state import Shell


def scripted(items):
    pending = iter(items)
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        item = next(pending)
        if isinstance(item, BaseException):
            raise item
        return item

    return read_line, prompts


@pytest.fixture
def shell():
    return Shell(["HOME=/", "USER=alice"])


def test_blank_line_keeps_status(shell):
    shell.status = 7
    assert handle_line(shell, "   ") == 7
    assert handle_line(shell, "") == 7


def test_echo_line(shell, capsys):
    assert handle_line(shell, "echo hi there") == 0
    assert capsys.readouterr().out == "hi there\n"


def test_bad_pipe_reports_error(shell, capsys):
    assert handle_line(shell, "| echo") == 2
    assert "Incorrect pipes" in capsys.readouterr().err


def test_missing_variable_keeps_status(shell, capsys):
    shell.status = 5
    assert handle_line(shell, "echo $MS_NOT_SET") == 5
    assert "Couldn't find MS_NOT_SET variable" in capsys.readouterr().err


def test_unknown_command_status(tmp_path, capsys):
    shell = Shell([f"PATH={tmp_path}"])
    assert handle_line(shell, "ms_no_such_program") == 127
    assert "Incorrect command" in capsys.readouterr().err


def test_export_then_expand(shell, capsys):
    handle_line(shell, "export COLOUR=blue")
    assert shell.get("COLOUR") == "blue"
    handle_line(shell, "echo $COLOUR")
    assert capsys.readouterr().out == "blue\n"


def test_exit_line_raises(shell, capsys):
    with pytest.raises(ShellExit) as info:
        handle_line(shell, "exit 3")
    assert info.value.status == 3
    assert "exit\n" in capsys.readouterr().err


def test_repl_runs_until_end_of_input(shell, capsys):
    shell.build_prompt()
    read_line, prompts = scripted(["echo a", None])
    assert repl(shell, read_line) == 0
    assert capsys.readouterr().out == "a\nexit\n"
    assert prompts == [shell.prompt, shell.prompt]
    assert prompts[0] == "alice@minishell $ "


def test_repl_exit_status(shell):
    read_line, _ = scripted(["echo a", "exit 4", "echo never"])
    assert repl(shell, read_line) == 4


def test_repl_survives_interrupt(shell, capsys):
    read_line, prompts = scripted([KeyboardInterrupt(), None])
    assert repl(shell, read_line) == 0
    assert capsys.readouterr().out == "\nexit\n"
    assert len(prompts) == 2


def test_repl_continues_after_error(shell, capsys):
    read_line, _ = scripted(["| echo", "echo ok", None])
    assert repl(shell, read_line) == 0
    captured = capsys.readouterr()
    assert captured.out == "ok\nexit\n"
    assert "Incorrect pipes" in captured.err


def test_main_ends_on_eof(monkeypatch, capsys):
    def end_of_input(prompt=""):
        raise EOFError

    monkeypatch.setenv("USER", "alice")
    monkeypatch.setattr("builtins.input", end_of_input)
    assert main([]) == 0
    assert capsys.readouterr().out.endswith("exit\n")


def test_main_exit_status(monkeypatch):
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return "exit 7"

    monkeypatch.setenv("USER", "alice")
    monkeypatch.setattr("builtins.input", fake_input)
    assert main([]) == 7
    assert len(prompts) == 1