"""
Tests for Remindly settings
"""

import os
from pathlib import Path

from remindly.config import DEFAULT_HOME, DEFAULT_HOTKEY, load_env_file, load_settings


def test_defaults():
    settings = load_settings(env={})

    assert settings.home == DEFAULT_HOME
    assert settings.log_level == "INFO"
    assert settings.notification_timeout == 10
    assert settings.refresh_seconds == 30
    assert settings.global_hotkey == DEFAULT_HOTKEY
    assert settings.speak_alerts is False
    assert settings.speech_rate == 175
    assert settings.spool_path == DEFAULT_HOME / "pending_notifications.json"


def test_overrides(tmp_path):
    settings = load_settings(env={
        "REMINDLY_HOME": str(tmp_path),
        "REMINDLY_LOG_LEVEL": "debug",
        "REMINDLY_NOTIFICATION_TIMEOUT": "5",
        "REMINDLY_REFRESH_SECONDS": "0",
        "REMINDLY_GLOBAL_HOTKEY": "",
        "REMINDLY_SPEAK_ALERTS": "yes",
        "REMINDLY_SPEECH_RATE": "150",
    })

    assert settings.home == tmp_path
    assert settings.spool_path == tmp_path / "pending_notifications.json"
    assert settings.log_level == "DEBUG"
    assert settings.notification_timeout == 5
    assert settings.refresh_seconds == 0
    assert settings.global_hotkey == ""
    assert settings.speak_alerts is True
    assert settings.speech_rate == 150


def test_invalid_numbers_fall_back():
    settings = load_settings(env={
        "REMINDLY_NOTIFICATION_TIMEOUT": "soon",
        "REMINDLY_SPEECH_RATE": "  ",
        "REMINDLY_SPEAK_ALERTS": "nope",
    })

    assert settings.notification_timeout == 10
    assert settings.speech_rate == 175
    assert settings.speak_alerts is False


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("REMINDLY_SPEECH_RATE", raising=False)
    env_path = tmp_path / ".env"
    env_path.write_text("REMINDLY_SPEECH_RATE=140\n", encoding="utf-8")

    assert load_env_file(env_path)
    assert not load_env_file(Path(tmp_path / "missing.env"))

    assert os.environ["REMINDLY_SPEECH_RATE"] == "140"
    monkeypatch.delenv("REMINDLY_SPEECH_RATE")
