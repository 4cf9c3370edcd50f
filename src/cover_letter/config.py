"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from cover_letter.errors import ConfigurationError, LayoutInputError
from cover_letter.export.layout import PageGeometry
from cover_letter.providers.registry import build_default_registry


@dataclass(frozen=True)
class LLMConfig:
    provider: str | None = None  # None: detect from the API key
    model: str | None = None
    timeout: int = 60
    extraction_temperature: float = 0.1
    letter_temperature: float = 0.5

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ConfigurationError(f"llm.timeout must be within 1..600, got {self.timeout}")
        for name in ("extraction_temperature", "letter_temperature"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"llm.{name} must be within 0..1, got {value}")


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.cover-letter/store.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class OutputConfig:
    directory: str = "output"

    @property
    def resolved_directory(self) -> Path:
        return Path(self.directory).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    page: PageGeometry = field(default_factory=PageGeometry)
    storage: StorageConfig = field(default_factory=StorageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path.home() / ".cover-letter" / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    try:
        page = PageGeometry(**raw.get("page", {}))
    except LayoutInputError as e:
        raise ConfigurationError(f"page: {e}") from e

    llm = LLMConfig(**raw.get("llm", {}))
    registry = build_default_registry()
    if llm.provider is not None and llm.provider not in registry:
        known = ", ".join(d.id for d in registry)
        raise ConfigurationError(f"llm.provider must be one of {known}, got {llm.provider!r}")

    return AppConfig(
        llm=llm,
        page=page,
        storage=StorageConfig(**raw.get("storage", {})),
        output=OutputConfig(**raw.get("output", {})),
    )
