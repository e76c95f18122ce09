"""
Configuration management for PageLens using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class ResolverConfig(BaseModel):
    """Schema.org path resolution settings."""

    max_depth: int = Field(
        default=64,
        ge=1,
        description="Nesting depth after which a structured-data branch is abandoned.",
    )
    separator: str = Field(default=", ", description="Separator used to join multiple resolved values.")


class ScoringConfig(BaseModel):
    """Weights and thresholds for main-content scoring."""

    min_score: float = Field(default=50.0, description="Score a candidate must exceed to be selected.")
    paragraph_bonus: float = Field(default=10.0, description="Bonus per descendant <p>.")
    link_density_penalty: float = Field(default=5.0, ge=0, description="Penalty multiplier for links per word.")
    image_density_penalty: float = Field(default=3.0, ge=0, description="Penalty multiplier for images per word.")
    right_side_bonus: float = Field(default=5.0, description="Bonus when the element starts right of centre.")
    date_bonus: float = Field(default=10.0, description="Bonus when the text mentions a full date.")
    byline_bonus: float = Field(default=10.0, description="Bonus when the text contains a byline.")
    content_class_bonus: float = Field(default=15.0, description="Bonus for content-like class names.")
    content_class_hints: List[str] = Field(default_factory=lambda: ["content", "article", "post"])
    footnote_bonus: float = Field(default=10.0, description="Bonus when footnote references are present.")
    nested_table_penalty: float = Field(default=5.0, ge=0, description="Penalty per descendant <table>.")
    layout_table_min_width: int = Field(
        default=400,
        ge=0,
        description="Width in pixels above which a table is treated as a page layout table.",
    )
    layout_table_classes: List[str] = Field(default_factory=lambda: ["content", "article"])
    layout_cell_bonus: float = Field(default=10.0, description="Bonus for inner cells of a layout table.")

    @field_validator("content_class_hints", "layout_table_classes")
    @classmethod
    def normalize_hints(cls, v: List[str]) -> List[str]:
        """Hints are matched against lowercased class names."""
        hints = [hint.strip().lower() for hint in v if hint.strip()]
        if not hints:
            raise ValueError("class hint lists must contain at least one entry")
        return hints


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PAGELENS_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data: Any = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    paths_to_check = [
        current_dir / "pagelens.yaml",
        current_dir / "pagelens.yml",
    ]
    for path in paths_to_check:
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from the given or discovered file, else defaults."""
    config_path = path or find_config_file()
    if config_path:
        try:
            log.info("Loading configuration from: %s", config_path)
            return Config.from_yaml(config_path)
        except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
            log.error(
                "Failed to load or validate configuration from '%s': %s. "
                "Falling back to default settings. Please check your config file.",
                config_path,
                e,
                exc_info=log.getEffectiveLevel() <= logging.DEBUG,
            )
    else:
        log.info("No config file found. Using default settings.")

    return Config()
