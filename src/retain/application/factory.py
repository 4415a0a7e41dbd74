"""
Adapter Factory
Centralizes the logic for building the concrete adapters a review needs.
"""

from datetime import datetime, timezone

from retain.application.config import AppConfig
from retain.application.review_service import ReviewService
from retain.domain.ports import CardSource, Clock, ReviewTerminal, StateStore
from retain.infrastructure.adapters.csv_source import CsvCardSource
from retain.infrastructure.adapters.yaml_store import YamlStateStore
from retain.infrastructure.terminal import ClickTerminal


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_card_source(config: AppConfig) -> CardSource:
    return CsvCardSource(delimiter=config.delimiter, has_header=config.has_header)


def get_state_store(config: AppConfig) -> StateStore:
    return YamlStateStore()


def get_terminal(config: AppConfig) -> ReviewTerminal:
    """Labels on screen show the first key of each binding."""
    return ClickTerminal(
        reveal_key=config.reveal_keys[0],
        correct_key=config.correct_keys[0],
        incorrect_key=config.incorrect_keys[0],
        abort_key=config.abort_keys[0],
    )


def get_review_service(config: AppConfig, clock: Clock = utc_now) -> ReviewService:
    return ReviewService(
        config,
        source=get_card_source(config),
        store=get_state_store(config),
        clock=clock,
    )
