"""Interactive review screen on the controlling terminal."""

import click

from retain.domain.constants import ESCAPE
from retain.domain.models import Card
from retain.domain.ports import ReviewTerminal

KEY_NAMES = {" ": "space", ESCAPE: "esc", "\r": "enter", "\t": "tab"}


def key_label(key: str) -> str:
    return KEY_NAMES.get(key, key)


class ClickTerminal(ReviewTerminal):
    """
    Full-redraw terminal driver built on click's termui helpers.

    ``click.getchar`` switches the tty to raw mode for the duration of each
    read, so nothing has to be restored on exit.
    """

    def __init__(
        self,
        reveal_key: str = " ",
        correct_key: str = "1",
        incorrect_key: str = "2",
        abort_key: str = ESCAPE,
    ):
        self.reveal_key = reveal_key
        self.correct_key = correct_key
        self.incorrect_key = incorrect_key
        self.abort_key = abort_key

    def _draw(self, *lines: str) -> None:
        click.clear()
        for line in lines:
            click.echo(line)

    def _footer(self, position: int, total: int) -> str:
        return click.style(
            f"card {position}/{total}  ({key_label(self.abort_key)} to quit without saving)",
            dim=True,
        )

    def render_prompt(self, card: Card, position: int, total: int) -> None:
        self._draw(
            card.key,
            f"press {key_label(self.reveal_key)} to flip",
            "",
            self._footer(position, total),
        )

    def render_answer(self, card: Card, position: int, total: int) -> None:
        options = (
            click.style(f"({key_label(self.correct_key)}) Correct", underline=True)
            + "  "
            + click.style(f"({key_label(self.incorrect_key)}) Incorrect", underline=True)
        )
        self._draw(
            f"{card.key} -> {card.answer}",
            options,
            "",
            self._footer(position, total),
        )

    def read_key(self) -> str:
        try:
            return click.getchar()
        except (KeyboardInterrupt, EOFError):
            # Ctrl-C / Ctrl-D arrive as exceptions from the raw read
            return self.abort_key

    def close(self) -> None:
        click.clear()
