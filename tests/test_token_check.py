import pytest

from minishell.errors import ShellError
from minishell.token_check import (
    check_pipes,
    check_problem_chars,
    check_redirections,
    check_tokens,
)


def test_pipe_between_words_is_fine():
    assert check_pipes(["ls", "|", "wc"]) is True


def test_leading_pipe_is_refused():
    assert check_pipes(["|", "ls"]) is False


def test_double_pipe_is_refused():
    assert check_pipes(["ls", "|", "|", "wc"]) is False


def test_trailing_pipe_passes_this_check():
    assert check_pipes(["ls", "|"]) is True


def test_redirection_after_word_is_fine():
    assert check_redirections(["ls", ">", "out"]) is True


@pytest.mark.parametrize("op", ["<", ">", ">>"])
def test_leading_redirection_is_refused(op):
    assert check_redirections([op, "file"]) is False


def test_consecutive_redirections_are_refused():
    assert check_redirections(["ls", ">", ">>", "out"]) is False


def test_here_doc_is_not_checked():
    assert check_redirections(["<<", "EOF"]) is True


def test_check_tokens_returns_tokens():
    tokens = ["echo", "*", ";", '"`a\\"']
    assert check_tokens(tokens) == tokens


def test_problem_chars_accepts_quoted_text():
    tokens = ["echo", "'(a)'", '"{b}"']
    check_problem_chars(tokens)
    assert check_tokens(tokens) == tokens


def test_check_tokens_reports_pipes():
    with pytest.raises(ShellError) as info:
        check_tokens(["|", "ls"])
    assert info.value.message == "Incorrect pipes"
    assert info.value.status == 2


def test_check_tokens_reports_redirections():
    with pytest.raises(ShellError) as info:
        check_tokens(["ls", ">", ">", "out"])
    assert info.value.message == "Incorrect redirections"
    assert info.value.status == 2


def test_pipes_are_checked_before_redirections():
    with pytest.raises(ShellError) as info:
        check_tokens(["|", ">", ">"])
    assert info.value.message == "Incorrect pipes"