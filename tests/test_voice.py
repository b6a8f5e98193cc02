"""
Tests for spoken reminder alerts (TTS engine mocked)
"""

import time
from unittest.mock import Mock, patch

from remindly.tools.notification_center import (
    NotificationContent,
    NotificationRequest,
    TimeIntervalTrigger,
)
from remindly.voice import AlertAnnouncer, alert_text


def _request(title: str) -> NotificationRequest:
    return NotificationRequest(
        identifier="r1",
        content=NotificationContent(title=title, body="Your reminder is due!"),
        trigger=TimeIntervalTrigger(1)
    )


def test_alert_text():
    assert alert_text(_request("📅 Pay rent - Reminder due")) == "Pay rent is due"
    assert alert_text(_request("🔔  - Reminder due")) == "Reminder is due"
    assert alert_text(_request("Plain title")) == "Plain title is due"


def _wait_for(condition, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.02)
    return False


def test_announcer_speaks_on_worker():
    engine = Mock()
    with patch('remindly.voice.voice_output.pyttsx3.init', return_value=engine):
        announcer = AlertAnnouncer(rate=160)
        try:
            announcer.announce(_request("📝 Water plants - Reminder due"))
            assert _wait_for(lambda: engine.runAndWait.called)
        finally:
            announcer.shutdown()

    engine.setProperty.assert_called_with('rate', 160)
    engine.say.assert_called_once_with("Water plants is due")
    assert not announcer.tts_thread.is_alive()


def test_announcer_survives_engine_error():
    engine = Mock()
    engine.runAndWait.side_effect = [RuntimeError("audio device busy"), None]
    with patch('remindly.voice.voice_output.pyttsx3.init', return_value=engine) as mock_init:
        announcer = AlertAnnouncer()
        try:
            announcer.speak("first")
            announcer.speak("second")
            assert _wait_for(lambda: engine.runAndWait.call_count == 2)
        finally:
            announcer.shutdown()

    assert mock_init.call_count == 2, "Engine is reinitialized after an error"
    announcer.speak("   ")
    assert announcer.tts_queue.empty()
