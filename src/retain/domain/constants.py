"""Centralized constants for retain.

The scheduling table and default key bindings live here so every layer
imports from a single source of truth.
"""

from datetime import datetime, timedelta, timezone

# ---------- Scheduling ----------
# Minimum elapsed time before a card at a given level is due again.
# Levels past the end of the table reuse the last entry.
DUE_INTERVALS: tuple[timedelta, ...] = (
    timedelta(0),
    timedelta(minutes=1),
    timedelta(minutes=10),
    timedelta(hours=12),
    timedelta(days=1),
    timedelta(days=5),
    timedelta(days=20),
    timedelta(days=60),
)

# Never-reviewed cards carry this timestamp.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# ---------- Key bindings ----------
ESCAPE = "\x1b"
DEFAULT_REVEAL_KEYS = [" "]
DEFAULT_CORRECT_KEYS = ["1", " "]
DEFAULT_INCORRECT_KEYS = ["2"]
DEFAULT_ABORT_KEYS = [ESCAPE]

# ---------- Storage ----------
STORE_SUFFIX = ".retain.yaml"
DEFAULT_DELIMITER = ","
