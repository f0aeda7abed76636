"""Application configuration."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dish_facts.nutrition.resolver import DEFAULT_MAX_DEPTH

ENV_PREFIX = "DISH_FACTS_"


@dataclass
class Settings:
    """Settings shared by the CLI and the HTTP API."""

    recipe_root: Path = field(default_factory=Path.cwd)
    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Create settings from ``DISH_FACTS_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Settings instance

        Raises:
            ValueError: If a numeric variable is malformed or out of range
        """
        env = os.environ if environ is None else environ
        settings = cls()

        recipe_root = env.get(f"{ENV_PREFIX}RECIPE_ROOT")
        if recipe_root:
            settings.recipe_root = Path(recipe_root).expanduser()

        settings.max_depth = _int_var(env, "MAX_DEPTH", settings.max_depth)
        if settings.max_depth < 1:
            raise ValueError(f"{ENV_PREFIX}MAX_DEPTH must be positive, got {settings.max_depth}")

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            settings.log_level = log_level.strip().upper()
            if not isinstance(logging.getLevelName(settings.log_level), int):
                raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a log level: {log_level!r}")

        host = env.get(f"{ENV_PREFIX}HOST")
        if host:
            settings.host = host.strip()
        settings.port = _int_var(env, "PORT", settings.port)
        return settings


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
