"""
Remindly Voice Output - Spoken Reminder Alerts

Optional companion to the desktop notification: when a reminder fires,
say it out loud.

Architecture:
- Delivery thread: queues the text
- TTS thread: consumes the queue and speaks
- Non-blocking design
"""

import logging
import threading
from queue import Queue, Empty

import pyttsx3

from remindly.tools.notification_center import NotificationRequest

logger = logging.getLogger(__name__)


def alert_text(request: NotificationRequest) -> str:
    """'🔔 Pay rent - Reminder due' -> 'Pay rent is due'"""
    title = request.content.title
    if title.endswith(" - Reminder due"):
        title = title[: -len(" - Reminder due")]
    # Drop the leading icon glyph
    parts = title.split(" ", 1)
    if len(parts) == 2 and not parts[0].isalnum():
        title = parts[1]
    return f"{title.strip() or 'Reminder'} is due"


class AlertAnnouncer:
    """
    Non-blocking TTS for delivered notifications.

    Design:
    - Lightweight wrapper around pyttsx3
    - Engine lives on the worker thread
    - Errors reinitialize the engine instead of killing the thread
    """

    def __init__(self, rate: int = 175):
        """
        Start the TTS worker.

        Args:
            rate: Speech rate (words per minute, default: 175)
        """
        self.tts_queue: Queue = Queue()
        self._shutdown = threading.Event()
        self._rate = rate

        self.tts_thread = threading.Thread(
            target=self._tts_worker,
            daemon=True,
            name="Remindly-TTS"
        )
        self.tts_thread.start()

        logger.info(f"AlertAnnouncer initialized (rate={rate})")

    def announce(self, request: NotificationRequest):
        """Delivery listener: queue the spoken alert"""
        self.speak(alert_text(request))

    def speak(self, text: str):
        if not text or not text.strip():
            return
        self.tts_queue.put(text)
        logger.debug(f"Queued TTS: {text[:50]}")

    def _init_engine(self):
        engine = pyttsx3.init()
        engine.setProperty('rate', self._rate)
        return engine

    def _tts_worker(self):
        engine = None

        try:
            engine = self._init_engine()
            logger.info("TTS engine initialized")

            while not self._shutdown.is_set():
                try:
                    text = self.tts_queue.get(timeout=0.5)
                except Empty:
                    continue

                try:
                    logger.info(f"Speaking: {text}")
                    engine.say(text)
                    engine.runAndWait()
                except Exception as e:
                    logger.error(f"TTS error: {e}", exc_info=True)
                    try:
                        engine.stop()
                        engine = self._init_engine()
                        logger.info("TTS engine reinitialized after error")
                    except Exception:
                        logger.error("Failed to reinitialize TTS engine", exc_info=True)

        except Exception as e:
            logger.error(f"TTS worker initialization failed: {e}", exc_info=True)

        finally:
            if engine:
                try:
                    engine.stop()
                except Exception:
                    logger.debug("TTS engine stop failed", exc_info=True)
            logger.info("TTS worker shutting down")

    def shutdown(self):
        """Signal the worker to stop and wait briefly for it"""
        logger.info("Shutting down AlertAnnouncer")
        self._shutdown.set()

        if self.tts_thread.is_alive():
            self.tts_thread.join(timeout=2.0)
            if self.tts_thread.is_alive():
                logger.warning("TTS worker thread did not stop cleanly")
