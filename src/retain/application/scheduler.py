"""
Due-set scheduler.

Decides which cards are eligible for review at a given moment and fixes
the traversal order for a session:
1. Look up the minimum interval for each card's level
2. Keep cards whose elapsed time since last review meets that interval
3. Shuffle the surviving keys once
"""

import logging
import random
from collections import Counter
from datetime import datetime, timedelta

from retain.domain.constants import DUE_INTERVALS
from retain.domain.models import Card, DueSummary

logger = logging.getLogger(__name__)


def interval_for(level: int) -> timedelta:
    """Minimum elapsed time before a card at ``level`` is due again."""
    if level < 0:
        raise ValueError(f"level must be non-negative, got {level}")
    return DUE_INTERVALS[min(level, len(DUE_INTERVALS) - 1)]


def is_due(card: Card, now: datetime) -> bool:
    interval = interval_for(card.level)
    # A zero interval is due even if last_reviewed is ahead of now
    if not interval:
        return True
    return now - card.last_reviewed >= interval


def select_due(
    cards: dict[str, Card],
    now: datetime,
    rng: random.Random | None = None,
) -> list[str]:
    """
    Build the traversal order for one session.

    Args:
        cards: The working set, keyed by card key.
        now: The moment due-ness is evaluated at.
        rng: Source of randomness; pass a seeded ``random.Random`` for a
            reproducible order.

    Returns:
        Keys of the due cards in a uniformly random order. Empty when
        nothing is due.
    """
    due = [key for key, card in cards.items() if is_due(card, now)]
    (rng or random.Random()).shuffle(due)
    logger.debug(f"{len(due)}/{len(cards)} cards due at {now.isoformat()}")
    return due


def due_summary(cards: dict[str, Card], now: datetime) -> DueSummary:
    by_level = Counter(card.level for card in cards.values())
    return DueSummary(
        total=len(cards),
        due=sum(1 for card in cards.values() if is_due(card, now)),
        by_level=dict(sorted(by_level.items())),
    )
