from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from retain.domain.constants import (
    DEFAULT_ABORT_KEYS,
    DEFAULT_CORRECT_KEYS,
    DEFAULT_DELIMITER,
    DEFAULT_INCORRECT_KEYS,
    DEFAULT_REVEAL_KEYS,
    STORE_SUFFIX,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/retain/config.toml",
        Path.home() / ".retain.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for retain.
    Supports loading from:
    1. Config file (~/.config/retain/config.toml)
    2. Environment variables (RETAIN_*)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="RETAIN_",
        extra="ignore",
    )

    # Paths
    source_path: Path | None = None
    store_path: Path | None = None

    # Source format
    delimiter: str = DEFAULT_DELIMITER
    has_header: bool = True

    # Session
    seed: int | None = None
    reveal_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_REVEAL_KEYS))
    correct_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_CORRECT_KEYS))
    incorrect_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_INCORRECT_KEYS))
    abort_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_ABORT_KEYS))

    verbose: int = 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; earlier sources take priority.
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("source_path", "store_path", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()

    @field_validator("delimiter")
    @classmethod
    def single_char_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @field_validator("reveal_keys", "correct_keys", "incorrect_keys", "abort_keys")
    @classmethod
    def at_least_one_key(cls, v: list[str]) -> list[str]:
        if not v or any(not key for key in v):
            raise ValueError("each binding needs at least one non-empty key")
        return v


def default_store_path(source_path: Path) -> Path:
    """Hidden sidecar next to the source: ``deck.csv`` -> ``.deck.csv.retain.yaml``."""
    return source_path.parent / f".{source_path.name}{STORE_SUFFIX}"


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/retain/config.toml (if exists)
    3. Environment variables (RETAIN_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    config = AppConfig(**overrides)

    if config.store_path is None and config.source_path is not None:
        config.store_path = default_store_path(config.source_path)

    return config
