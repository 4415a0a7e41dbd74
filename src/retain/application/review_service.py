"""
Review service — application layer orchestrator.

Coordinates loading the card set, selecting due cards, running the
interactive session and flushing the results.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from retain.application.card_store import load_cards
from retain.application.config import AppConfig
from retain.application.persistence import flush
from retain.application.scheduler import due_summary, select_due
from retain.application.session import KeyBindings, ReviewSession, SessionResult
from retain.domain.errors import UsageError
from retain.domain.models import Card, DueSummary
from retain.domain.ports import CardSource, Clock, ReviewTerminal, StateStore

logger = logging.getLogger(__name__)


class Outcome(Enum):
    NOTHING_DUE = "nothing_due"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ReviewReport:
    outcome: Outcome
    due: int
    session: SessionResult | None = None


def bindings_from_config(config: AppConfig) -> KeyBindings:
    return KeyBindings(
        reveal=list(config.reveal_keys),
        correct=list(config.correct_keys),
        incorrect=list(config.incorrect_keys),
        abort=list(config.abort_keys),
    )


class ReviewService:
    """
    Runs a complete review: startup, session, write-back.

    Follows Dependency Inversion: depends on the CardSource, StateStore and
    ReviewTerminal ports, not concrete adapters.
    """

    def __init__(
        self,
        config: AppConfig,
        source: CardSource,
        store: StateStore,
        clock: Clock,
        rng: random.Random | None = None,
    ):
        if config.source_path is None or config.store_path is None:
            raise UsageError("A source file is required")
        self.config = config
        self._source = source
        self._store = store
        self._clock = clock
        self._rng = rng or random.Random(config.seed)

    def load(self) -> dict[str, Card]:
        return load_cards(self.config.source_path, self.config.store_path, self._source, self._store)

    def status(self) -> DueSummary:
        return due_summary(self.load(), self._clock())

    def review(self, terminal: ReviewTerminal) -> ReviewReport:
        """
        Run one review.

        Startup failures propagate before the terminal is touched. The
        store is written only when every due card has been graded.
        """
        cards = self.load()
        order = select_due(cards, self._clock(), self._rng)
        if not order:
            logger.info("No cards due")
            return ReviewReport(outcome=Outcome.NOTHING_DUE, due=0)

        session = ReviewSession(cards, order, self._clock, bindings_from_config(self.config))
        try:
            result = session.run(terminal)
        finally:
            terminal.close()

        if not result.completed:
            logger.info(f"Session aborted after {result.graded} grade(s); nothing saved")
            return ReviewReport(outcome=Outcome.ABORTED, due=len(order), session=result)

        flush(self._store, self.config.store_path, cards)
        return ReviewReport(outcome=Outcome.COMPLETED, due=len(order), session=result)
