import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml  # type: ignore
import yaml.constructor
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from retain.domain.errors import StoreFormatError, WriteError
from retain.domain.models import Card, StoredState
from retain.domain.ports import StateStore


class UniqueKeyLoader(yaml.SafeLoader):
    """Custom YAML loader that forbids duplicate keys."""

    def construct_mapping(self, node, deep=False):
        mapping = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in mapping:
                raise yaml.constructor.ConstructorError(
                    None, None, f"found duplicate key '{key}'", key_node.start_mark
                )
            mapping.add(key)
        return super().construct_mapping(node, deep)


class StoredRecord(BaseModel):
    """Schema of one entry in the state file."""

    model_config = ConfigDict(extra="ignore")

    level: int = Field(ge=0, strict=True)
    last_reviewed: datetime
    answer: str = ""

    @field_validator("last_reviewed")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


def _record(state: StoredState) -> dict[str, Any]:
    return {
        "level": state.level,
        "last_reviewed": state.last_reviewed.isoformat(),
        "answer": state.answer,
    }


class YamlStateStore(StateStore):
    """
    Review state kept as a YAML mapping keyed by card question.

    Writes go to a temporary sibling that replaces the target, so a failed
    save leaves the previous file intact.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def load(self, path: Path) -> dict[str, StoredState]:
        if not path.exists():
            self.logger.debug(f"No state file at {path}; starting fresh")
            return {}

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreFormatError(f"Cannot read review state {path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = yaml.load(raw, Loader=UniqueKeyLoader)
        except yaml.YAMLError as e:
            raise StoreFormatError(f"Review state {path} is not valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise StoreFormatError(
                f"Review state {path} must be a mapping of question -> record, "
                f"got {type(data).__name__}"
            )

        states: dict[str, StoredState] = {}
        for key, record in data.items():
            if not isinstance(key, str):
                raise StoreFormatError(f"Review state {path}: key {key!r} is not a string")
            try:
                parsed = StoredRecord.model_validate(record)
            except ValidationError as e:
                raise StoreFormatError(
                    f"Review state {path}: invalid record for {key!r}: {e}"
                ) from e
            states[key] = StoredState(
                level=parsed.level,
                last_reviewed=parsed.last_reviewed,
                answer=parsed.answer,
            )

        self.logger.debug(f"Loaded {len(states)} records from {path}")
        return states

    def save(self, path: Path, cards: dict[str, Card]) -> None:
        data: dict[str, Any] = {key: _record(card.to_state()) for key, card in cards.items()}

        try:
            text = yaml.dump(
                data,
                Dumper=yaml.SafeDumper,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        except yaml.YAMLError as e:
            raise WriteError(f"Could not serialize review state: {e}") from e

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteError(f"Could not write review state to {path}: {e}") from e
