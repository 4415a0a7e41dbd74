"""Error taxonomy for retain.

Every failure the CLI reports to the user is a ``RetainError``. The
``exit_code`` attribute is what the process exits with.
"""


class RetainError(Exception):
    """Base class for user-facing failures."""

    exit_code = 1


class UsageError(RetainError):
    """Missing or invalid command line input."""

    exit_code = 2


class SourceFormatError(RetainError):
    """A row in the card source is malformed or missing a required field."""

    def __init__(self, message: str, path=None, line: int | None = None):
        self.path = path
        self.line = line
        location = ""
        if path is not None:
            location = f"{path}:{line}: " if line is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class StoreFormatError(RetainError):
    """The persisted review state exists but cannot be parsed."""


class WriteError(RetainError):
    """The persisted review state could not be written."""
