import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from retain.domain.ports import ReviewTerminal

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class ScriptedTerminal(ReviewTerminal):
    """Feeds a fixed sequence of keys and records what was rendered."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.screens: list[tuple[str, str, int, int]] = []
        self.closed = False

    def render_prompt(self, card, position, total):
        self.screens.append(("prompt", card.key, position, total))

    def render_answer(self, card, position, total):
        self.screens.append(("answer", card.key, position, total))

    def read_key(self):
        if not self.keys:
            raise AssertionError("session asked for more keys than scripted")
        return self.keys.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir and clears RETAIN_* variables."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.startswith("RETAIN_"):
            monkeypatch.delenv(name)
    return home


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def deck(tmp_path) -> Path:
    """A small CSV deck with a header row."""
    path = tmp_path / "deck.csv"
    path.write_text("question,answer\nhola,hello\nadios,goodbye\ngato,cat\n", encoding="utf-8")
    return path


@pytest.fixture
def terminal_factory():
    def make(keys):
        return ScriptedTerminal(keys)

    return make
