"""
Remindly Configuration

Settings come from the environment, with a `.env` file next to the package
loaded first. Set any REMINDLY_* variable to override a default.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


DEFAULT_HOME = Path.home() / ".remindly"
DEFAULT_HOTKEY = "ctrl+alt+n"


def load_env_file(env_path: Optional[Path] = None) -> bool:
    """Load environment variables from .env file if it exists."""
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if not env_path.exists():
        return False
    load_dotenv(env_path)
    logger.debug(f"Loaded environment from {env_path}")
    return True


@dataclass
class Settings:
    """Runtime settings for the desktop app"""
    home: Path = DEFAULT_HOME
    log_level: str = "INFO"
    notification_timeout: int = 10
    refresh_seconds: int = 30
    global_hotkey: str = DEFAULT_HOTKEY
    speak_alerts: bool = False
    speech_rate: int = 175

    @property
    def spool_path(self) -> Path:
        return self.home / "pending_notifications.json"


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {key}: {raw!r}, using {default}")
        return default


def _bool_setting(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env: Mapping to read (default: os.environ after loading .env)

    Returns:
        Settings with defaults for anything unset or invalid
    """
    if env is None:
        load_env_file()
        env = os.environ

    home = env.get("REMINDLY_HOME")
    return Settings(
        home=Path(home).expanduser() if home else DEFAULT_HOME,
        log_level=env.get("REMINDLY_LOG_LEVEL", "INFO").upper(),
        notification_timeout=_int_setting(env, "REMINDLY_NOTIFICATION_TIMEOUT", 10),
        refresh_seconds=_int_setting(env, "REMINDLY_REFRESH_SECONDS", 30),
        global_hotkey=env.get("REMINDLY_GLOBAL_HOTKEY", DEFAULT_HOTKEY).strip(),
        speak_alerts=_bool_setting(env, "REMINDLY_SPEAK_ALERTS", False),
        speech_rate=_int_setting(env, "REMINDLY_SPEECH_RATE", 175),
    )
