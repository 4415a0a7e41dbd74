"""Tests for layered configuration resolution."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from retain.application.config import AppConfig, default_store_path, resolve_config


def test_defaults():
    config = AppConfig()
    assert config.delimiter == ","
    assert config.has_header is True
    assert config.seed is None
    assert config.reveal_keys == [" "]
    assert config.correct_keys == ["1", " "]
    assert config.incorrect_keys == ["2"]
    assert config.abort_keys == ["\x1b"]


def test_default_store_path_is_hidden_sidecar(tmp_path):
    assert default_store_path(tmp_path / "deck.csv") == tmp_path / ".deck.csv.retain.yaml"


def test_resolve_derives_store_from_source(deck):
    config = resolve_config({"source_path": deck})
    assert config.source_path == deck.resolve()
    assert config.store_path == deck.resolve().parent / ".deck.csv.retain.yaml"


def test_explicit_store_wins(deck, tmp_path):
    config = resolve_config({"source_path": deck, "store_path": tmp_path / "state.yaml"})
    assert config.store_path == (tmp_path / "state.yaml").resolve()


def test_none_overrides_are_ignored(monkeypatch):
    monkeypatch.setenv("RETAIN_SEED", "9")
    config = resolve_config({"seed": None, "delimiter": None})
    assert config.seed == 9
    assert config.delimiter == ","


def test_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("RETAIN_DELIMITER", ";")
    assert resolve_config().delimiter == ";"
    assert resolve_config({"delimiter": "\t"}).delimiter == "\t"


def test_toml_file_is_read(mock_home: Path):
    cfg = mock_home / ".config/retain/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text('delimiter = ";"\nhas_header = false\nabort_keys = ["q"]\n', encoding="utf-8")

    config = resolve_config()

    assert config.delimiter == ";"
    assert config.has_header is False
    assert config.abort_keys == ["q"]


def test_env_beats_toml(mock_home: Path, monkeypatch):
    cfg = mock_home / ".retain.toml"
    cfg.write_text("seed = 1\n", encoding="utf-8")
    monkeypatch.setenv("RETAIN_SEED", "2")

    assert resolve_config().seed == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"delimiter": ";;"},
        {"delimiter": ""},
        {"reveal_keys": []},
        {"abort_keys": [""]},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        resolve_config(overrides)
