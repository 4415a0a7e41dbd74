"""
Domain models for cards and their review state.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .constants import EPOCH


@dataclass(frozen=True)
class StoredState:
    """
    Review state for one card as persisted between runs.

    Attributes:
        level: Mastery level at the time of the last grade.
        last_reviewed: When the card was last graded (aware UTC).
        answer: Answer text at the time of the last save.
    """

    level: int
    last_reviewed: datetime
    answer: str = ""


@dataclass
class Card:
    """
    A single flashcard in the working set.

    ``key`` is the question text and identifies the card across runs.
    """

    key: str
    answer: str
    level: int = 0
    last_reviewed: datetime = field(default=EPOCH)

    def grade(self, correct: bool, now: datetime) -> None:
        """Apply a grade: correct climbs one level, incorrect drops to 0."""
        self.level = self.level + 1 if correct else 0
        self.last_reviewed = now

    def to_state(self) -> StoredState:
        return StoredState(level=self.level, last_reviewed=self.last_reviewed, answer=self.answer)


@dataclass(frozen=True)
class DueSummary:
    """Counts describing a card set at a point in time."""

    total: int
    due: int
    by_level: dict[int, int] = field(default_factory=dict)
