"""
Configuration management for epochseries.
Handles step validation policy, count clamping, logging and CLI settings.
"""
from pathlib import Path
from typing import Any, Dict, Optional
import json
import sys
from copy import deepcopy
from importlib.resources import files

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_SERIES_DEFAULTS_FALLBACK: Dict[str, Any] = {
    "validate_step": True,
    "log_level": "WARNING",
    "cli_max_print": 1000,
    "cli_default_step": "1h",
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_bool(value: Any, default: bool) -> bool:
    """Coerce various JSON-like values to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return bool(default)


def _normalize_series_defaults(raw: Any) -> Dict[str, Any]:
    """Merge loaded JSON defaults with fallbacks and type coercion."""
    merged = deepcopy(_SERIES_DEFAULTS_FALLBACK)
    if isinstance(raw, dict):
        merged.update(raw)

    merged["validate_step"] = _as_bool(
        merged.get("validate_step"),
        _SERIES_DEFAULTS_FALLBACK["validate_step"],
    )

    level = str(merged.get("log_level", "")).strip().upper()
    if level not in _LOG_LEVELS:
        level = _SERIES_DEFAULTS_FALLBACK["log_level"]
    merged["log_level"] = level

    try:
        merged["cli_max_print"] = max(1, int(merged.get("cli_max_print")))
    except (TypeError, ValueError):
        merged["cli_max_print"] = _SERIES_DEFAULTS_FALLBACK["cli_max_print"]

    merged["cli_default_step"] = str(
        merged.get("cli_default_step") or _SERIES_DEFAULTS_FALLBACK["cli_default_step"]
    )
    return merged


def _load_packaged_series_defaults() -> Dict[str, Any]:
    """Load packaged defaults JSON with fallback behavior."""
    raw_defaults: Any = {}
    try:
        resource = files("epochseries.defaults").joinpath("series_defaults.json")
        raw_defaults = json.loads(resource.read_text(encoding="utf-8"))
    except (OSError, ValueError, ModuleNotFoundError):
        raw_defaults = {}
    return _normalize_series_defaults(raw_defaults)


_SERIES_DEFAULTS = _load_packaged_series_defaults()


def get_series_defaults() -> Dict[str, Any]:
    """Return a copy of normalized defaults shared by the library and CLI."""
    return deepcopy(_SERIES_DEFAULTS)


class EpochSeriesConfig(BaseSettings):
    """Main configuration for epochseries."""

    model_config = SettingsConfigDict(
        env_prefix="EPOCHSERIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Series behavior
    validate_step: bool = _SERIES_DEFAULTS["validate_step"]
    max_count: int = Field(default=sys.maxsize, ge=0, le=sys.maxsize)

    # Logging
    log_level: str = _SERIES_DEFAULTS["log_level"]
    log_dir: Optional[Path] = None

    # CLI
    cli_max_print: int = _SERIES_DEFAULTS["cli_max_print"]
    cli_default_step: str = _SERIES_DEFAULTS["cli_default_step"]


_config_instance: Optional[EpochSeriesConfig] = None


def get_config() -> EpochSeriesConfig:
    """Get or create the global config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = EpochSeriesConfig()
    return _config_instance


def reset_config():
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None
