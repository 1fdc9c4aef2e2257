"""Configuration loading for TradeJournal."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_HOME_ENV = "TRADEJOURNAL_HOME"

DEFAULT_ANALYSIS = {
    "use_ai": False,
    "batch_size": 5,
    "delay_seconds": 1.0,
    "timeout_seconds": 30.0,
}


def get_config_dir() -> Path:
    """Get the configuration directory.

    Uses TRADEJOURNAL_HOME when set, otherwise ~/.config/tradejournal.
    """
    override = os.environ.get(CONFIG_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration from TOML.

    A missing or unreadable file means an empty config.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return {}

    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def get_db_path(config: dict[str, Any]) -> Path:
    """Get the journal database path."""
    configured = config.get("storage", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "journal.db"


def get_analysis_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Analysis settings merged over defaults."""
    return {**DEFAULT_ANALYSIS, **config.get("analysis", {})}


def get_openai_model(config: dict[str, Any]) -> Optional[str]:
    """Configured OpenAI model, if any."""
    return config.get("openai", {}).get("model")
