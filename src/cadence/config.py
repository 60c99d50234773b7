"""Configuration management for Cadence."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.agenda import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / "cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
DATA_DIR = CADENCE_HOME / "data"

SOURCES = ("file", "api")


@dataclass
class Config:
    """Cadence configuration."""

    routines_file: str = ""
    timezone: str = "America/Toronto"
    categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    # Where routines come from: "file" (local JSON) or "api" (tracker REST API)
    source: str = "file"
    api_base_url: str = ""
    api_token: str = ""

    def routines_path(self) -> Path:
        """Resolve the routines JSON file, falling back to the data dir."""
        if self.routines_file:
            return Path(self.routines_file).expanduser()
        return DATA_DIR / "routines.json"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "routines_file":
                config.routines_file = value
            case "timezone":
                config.timezone = value
            case "categories":
                config.categories = [c.strip() for c in value.split(",") if c.strip()]
            case "source":
                source = value.lower()
                if source in SOURCES:
                    config.source = source
                else:
                    logger.warning(f"Unknown SOURCE {value!r}, using 'file'")
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
