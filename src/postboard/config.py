"""Configuration for postboard.

Settings are read from POSTBOARD_* environment variables and an optional
.env file in the working directory. Relative database paths are resolved
against the project root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postboard.core.exceptions import ConfigurationError


MEMORY_DATABASE = ":memory:"


class Settings(BaseSettings):
    """Process-wide settings for the board and its cache.

    Example:
        >>> settings = Settings(cache_ttl=30)
        >>> settings.cache_ttl
        30.0
    """

    model_config = SettingsConfigDict(
        env_prefix="POSTBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cache sizing
    cache_capacity_hint: int = Field(default=100, gt=0)
    cache_max_cost: int = Field(default=1_000_000, gt=0)
    cache_ttl: float = Field(default=300.0, gt=0)
    cache_cost_mode: Literal["fixed", "size"] = "fixed"

    # Backing store
    database: str = "postboard.db"
    store_timeout: float = Field(default=5.0, gt=0)

    body_max_length: int = Field(default=256, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level

    def resolved_database(self, root: Path | None = None) -> Path | str:
        """Return the database target with relative paths made absolute.

        Args:
            root: Directory to resolve against. Defaults to the project root
                found from the current directory.

        Returns:
            ":memory:" unchanged, otherwise an absolute Path.
        """
        if self.database == MEMORY_DATABASE:
            return self.database
        path = Path(self.database).expanduser()
        if path.is_absolute():
            return path
        return (root or find_project_root()) / path


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment, applying explicit overrides.

    Args:
        **overrides: Field values that take precedence over the environment.
            None values are ignored.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid postboard settings: {e}") from e


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .postboard - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = [".postboard", "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()
