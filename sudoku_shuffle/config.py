"""Configuration management for sudoku-shuffle."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from sudoku_shuffle.data.shuffle import NUM_SHUFFLES


@dataclass
class GenerationConfig:
    """Board generation configuration."""

    base: int = 3
    num_shuffles: int = NUM_SHUFFLES
    seed: int | None = None
    corpus_path: str | None = None  # None = bundled corpus


@dataclass
class SessionConfig:
    """Game session configuration."""

    storage_dir: str = ".sudoku"
    autosave: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: str | None = None


@dataclass
class Config:
    """Complete application configuration."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw = yaml.safe_load(f)

        return cls.from_dict(raw or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from a dictionary."""
        config = cls()

        try:
            if "generation" in data:
                config.generation = GenerationConfig(**data["generation"])

            if "session" in data:
                config.session = SessionConfig(**data["session"])

            if "logging" in data:
                config.logging = LoggingConfig(**data["logging"])
        except TypeError as e:
            raise ValueError(f"Invalid config: {e}") from e

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "generation": dict(self.generation.__dict__),
            "session": dict(self.session.__dict__),
            "logging": dict(self.logging.__dict__),
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration from file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Configuration object.
    """
    if path is None:
        return Config()
    return Config.from_yaml(path)


def merge_configs(base: Config, overrides: dict[str, Any]) -> Config:
    """
    Merge override values into a base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values, nested by section.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.to_dict()

    for key, value in overrides.items():
        if isinstance(value, dict) and key in base_dict:
            base_dict[key].update(value)
        else:
            base_dict[key] = value

    return Config.from_dict(base_dict)
