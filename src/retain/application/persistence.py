"""Single end-of-session flush of the card set."""

import logging
from pathlib import Path

from retain.domain.errors import WriteError
from retain.domain.models import Card
from retain.domain.ports import StateStore

logger = logging.getLogger(__name__)


def flush(store: StateStore, store_path: Path, cards: dict[str, Card]) -> None:
    """
    Write every card's review state, untouched cards included.

    One attempt only. Any failure surfaces as ``WriteError``.
    """
    try:
        store.save(store_path, cards)
    except WriteError:
        raise
    except (OSError, ValueError) as e:
        raise WriteError(f"Could not write review state to {store_path}: {e}") from e

    logger.info(f"Saved review state for {len(cards)} cards to {store_path}")
