"""
Ports (interfaces) for card input, review state storage and terminal I/O.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .models import Card, StoredState

Clock = Callable[[], datetime]


class CardSource(ABC):
    """
    Port for reading raw card definitions.

    Implementations:
        - CsvCardSource: Delimited text file, one card per row.
    """

    @abstractmethod
    def read(self, path: Path) -> list[tuple[str, str]]:
        """
        Read (key, answer) pairs in source order.

        Raises:
            SourceFormatError: A row is malformed or a required field is missing.
        """
        pass


class StateStore(ABC):
    """
    Port for persisted review state.

    Implementations:
        - YamlStateStore: Hidden YAML sidecar next to the source file.
    """

    @abstractmethod
    def load(self, path: Path) -> dict[str, StoredState]:
        """
        Load persisted state keyed by card key. A missing file yields ``{}``.

        Raises:
            StoreFormatError: The file exists but cannot be parsed.
        """
        pass

    @abstractmethod
    def save(self, path: Path, cards: dict[str, Card]) -> None:
        """
        Persist the review state of every card.

        Raises:
            WriteError: The file could not be written.
        """
        pass


class ReviewTerminal(ABC):
    """
    Port for the interactive review screen.

    Implementations:
        - ClickTerminal: Raw key reads and full redraws on the controlling tty.
    """

    @abstractmethod
    def render_prompt(self, card: Card, position: int, total: int) -> None:
        """Show the question and how to reveal the answer."""
        pass

    @abstractmethod
    def render_answer(self, card: Card, position: int, total: int) -> None:
        """Show ``question -> answer`` and the grading options."""
        pass

    @abstractmethod
    def read_key(self) -> str:
        """Block until the next key press and return it."""
        pass

    def close(self) -> None:
        """Leave the review screen. Called once the session has ended."""
        pass
