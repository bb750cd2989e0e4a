# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env
#   file. Provides typed config objects to the client, the
#   handoff store, the text export and the CLI.
#
# CLASSES:
# --------
# - ApiConfig (dataclass)
#     base_url: str            (default "https://leakosintapi.com/")
#     token: str | None        (default None)
#     limit: int               (default 100)
#     lang: str                (default "en")
#     timeout_seconds: float   (default 15.0)
#
# - TrackingConfig (dataclass)
#     webhook_url: str | None  (default None → tracking disabled)
#
# - HandoffConfig (dataclass)
#     storage_dir: str         (default "handoff/")
#
# - ExportConfig (dataclass)
#     site_name: str           (default "Leakview Results")
#
# - AppConfig (dataclass)
#     api, tracking, handoff, export
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton (tests, or after changing the env).
#
# USAGE:
# ------
#   from leakview.config import get_config
#   config = get_config()
#   print(config.api.base_url)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class ApiConfig:
    """Breach-lookup API configuration."""
    base_url: str = "https://leakosintapi.com/"
    token: Optional[str] = None
    limit: int = 100
    lang: str = "en"
    timeout_seconds: float = 15.0


@dataclass
class TrackingConfig:
    """Search-event webhook configuration."""
    webhook_url: Optional[str] = None


@dataclass
class HandoffConfig:
    """Where normalized results are handed off between commands."""
    storage_dir: str = "handoff/"


@dataclass
class ExportConfig:
    """Plain-text export settings."""
    site_name: str = "Leakview Results"


@dataclass
class AppConfig:
    """Main application configuration."""
    api: ApiConfig = field(default_factory=ApiConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    handoff: HandoffConfig = field(default_factory=HandoffConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    api_config = ApiConfig(
        base_url=os.getenv("LEAKVIEW_API_URL", "https://leakosintapi.com/"),
        token=os.getenv("LEAKOSINT_API_KEY") or None,
        limit=_int_env("LEAKVIEW_SEARCH_LIMIT", 100),
        lang=os.getenv("LEAKVIEW_SEARCH_LANG", "en"),
        timeout_seconds=_float_env("LEAKVIEW_TIMEOUT_SECONDS", 15.0)
    )

    tracking_config = TrackingConfig(
        webhook_url=os.getenv("DISCORD_WEBHOOK_URL") or None
    )

    handoff_config = HandoffConfig(
        storage_dir=os.getenv("LEAKVIEW_HANDOFF_DIR", "handoff/")
    )

    export_config = ExportConfig(
        site_name=os.getenv("LEAKVIEW_SITE_NAME", "Leakview Results")
    )

    _config_instance = AppConfig(
        api=api_config,
        tracking=tracking_config,
        handoff=handoff_config,
        export=export_config
    )

    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
