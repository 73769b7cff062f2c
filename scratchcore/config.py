"""
Configuration management for scratchcore.
Supports config.json with environment variable overrides.
All paths are resolved relative to the project root.
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Project root directory (parent of 'scratchcore' folder)
PROJECT_ROOT = Path(__file__).parent.parent


def get_env(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def get_env_int(key: str, default: Optional[int] = 0) -> Optional[int]:
    """Get integer environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


# ==================== Configuration Models ====================

class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_to_file: bool = False
    formatter: str = "color"


class RngConfig(BaseModel):
    """Seed for reproducible draws. None uses the `secrets` module."""
    seed: Optional[int] = None


class HandConfig(BaseModel):
    max_hand_size: int = 5
    timezone: str = "UTC"


class CatalogConfig(BaseModel):
    """Optional JSON file whose prizes/layouts extend the built-in catalog."""
    catalog_file: Optional[str] = None
    default_ticket_gold_cost: int = 5


class PathsConfig(BaseModel):
    """All paths are relative to PROJECT_ROOT."""
    config_file: str = "config.json"
    log_file: str = "data/scratchcore.log"

    def get_config_path(self) -> Path:
        return PROJECT_ROOT / self.config_file

    def get_log_path(self) -> Path:
        return PROJECT_ROOT / self.log_file


class AppConfig(BaseModel):
    """Main configuration."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rng: RngConfig = Field(default_factory=RngConfig)
    hand: HandConfig = Field(default_factory=HandConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    def get_catalog_path(self) -> Optional[Path]:
        if not self.catalog.catalog_file:
            return None
        path = Path(self.catalog.catalog_file)
        return path if path.is_absolute() else PROJECT_ROOT / path


# ==================== Configuration Loading ====================

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from config.json with environment variable overrides.
    Environment variables take precedence over config.json values.
    """
    config_path = config_path or PathsConfig().get_config_path()

    data = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if get_env("LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = get_env("LOG_LEVEL")
    if get_env("LOG_TO_FILE"):
        data.setdefault("logging", {})["log_to_file"] = get_env_bool("LOG_TO_FILE")
    if get_env("LOG_FORMATTER"):
        data.setdefault("logging", {})["formatter"] = get_env("LOG_FORMATTER")

    if get_env("SCRATCHCORE_RNG_SEED"):
        data.setdefault("rng", {})["seed"] = get_env_int("SCRATCHCORE_RNG_SEED", None)

    if get_env("SCRATCHCORE_MAX_HAND_SIZE"):
        data.setdefault("hand", {})["max_hand_size"] = get_env_int("SCRATCHCORE_MAX_HAND_SIZE", 5)
    if get_env("SCRATCHCORE_TIMEZONE"):
        data.setdefault("hand", {})["timezone"] = get_env("SCRATCHCORE_TIMEZONE")

    if get_env("SCRATCHCORE_CATALOG_FILE"):
        data.setdefault("catalog", {})["catalog_file"] = get_env("SCRATCHCORE_CATALOG_FILE")

    return AppConfig(**data)


def save_config(config: AppConfig, config_path: Optional[Path] = None):
    """Save configuration to config.json."""
    config_path = config_path or PathsConfig().get_config_path()

    # Paths are computed, not persisted
    data = config.model_dump(exclude={"paths"})

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)


# Global config instance
settings = load_config()
