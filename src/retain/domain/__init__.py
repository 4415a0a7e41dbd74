# Domain Package
from .errors import RetainError, SourceFormatError, StoreFormatError, UsageError, WriteError
from .models import Card, DueSummary, StoredState
from .ports import CardSource, Clock, ReviewTerminal, StateStore

__all__ = [
    "Card",
    "CardSource",
    "Clock",
    "DueSummary",
    "RetainError",
    "ReviewTerminal",
    "SourceFormatError",
    "StateStore",
    "StoreFormatError",
    "StoredState",
    "UsageError",
    "WriteError",
]
