"""Builds the working card set from the source file and persisted state."""

import logging
from pathlib import Path

from retain.domain.models import Card, StoredState
from retain.domain.ports import CardSource, StateStore

logger = logging.getLogger(__name__)


def merge_cards(
    pairs: list[tuple[str, str]],
    stored: dict[str, StoredState],
) -> dict[str, Card]:
    """
    Merge source rows with persisted review state.

    Cards known to both keep the stored level and timestamp but take the
    source's answer. Source-only cards start fresh. Stored entries with no
    matching source row are dropped.
    """
    cards: dict[str, Card] = {}
    for key, answer in pairs:
        state = stored.get(key)
        if state is None:
            cards[key] = Card(key=key, answer=answer)
        else:
            cards[key] = Card(
                key=key,
                answer=answer,
                level=state.level,
                last_reviewed=state.last_reviewed,
            )

    stale = [key for key in stored if key not in cards]
    if stale:
        logger.info(f"Dropping {len(stale)} stored card(s) no longer in the source")
        logger.debug(f"Dropped keys: {stale}")

    return cards


def load_cards(
    source_path: Path,
    store_path: Path,
    source: CardSource,
    store: StateStore,
) -> dict[str, Card]:
    """
    Load the source, load persisted state, and merge them.

    Raises:
        SourceFormatError: The source file is malformed.
        StoreFormatError: The store file exists but is corrupt.
    """
    pairs = source.read(source_path)
    stored = store.load(store_path)
    cards = merge_cards(pairs, stored)
    logger.info(
        f"Loaded {len(cards)} cards from {source_path.name} "
        f"({len(stored)} with stored history)"
    )
    return cards
