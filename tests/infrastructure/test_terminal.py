"""Tests for the click-based review terminal."""

from unittest.mock import patch

import pytest

from retain.domain.models import Card
from retain.infrastructure.terminal import ClickTerminal, key_label


@pytest.fixture
def card():
    return Card("hola", "hello")


def test_prompt_screen(card, capsys):
    ClickTerminal().render_prompt(card, 2, 5)

    out = capsys.readouterr().out
    assert "hola" in out.splitlines()
    assert "press space to flip" in out
    assert "card 2/5" in out
    assert "hello" not in out


def test_answer_screen(card, capsys):
    ClickTerminal().render_answer(card, 1, 1)

    out = capsys.readouterr().out
    assert "hola -> hello" in out
    assert "(1) Correct" in out
    assert "(2) Incorrect" in out


def test_labels_follow_bindings(card, capsys):
    ClickTerminal(reveal_key="f", correct_key="y", incorrect_key="n", abort_key="q").render_answer(
        card, 1, 1
    )
    out = capsys.readouterr().out
    assert "(y) Correct" in out
    assert "(n) Incorrect" in out
    assert "q to quit" in out


def test_close_leaves_screen(capsys):
    ClickTerminal().close()
    assert capsys.readouterr().out == ""


@patch("retain.infrastructure.terminal.click.getchar", return_value="1")
def test_read_key(mock_getchar):
    assert ClickTerminal().read_key() == "1"


@pytest.mark.parametrize("exc", [KeyboardInterrupt, EOFError])
def test_interrupts_become_abort(exc):
    with patch("retain.infrastructure.terminal.click.getchar", side_effect=exc):
        assert ClickTerminal(abort_key="q").read_key() == "q"


def test_key_label():
    assert key_label(" ") == "space"
    assert key_label("\x1b") == "esc"
    assert key_label("1") == "1"
