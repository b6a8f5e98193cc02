"""
Remindly App - Main Entry Point

Wires the store, notification center, gateway and controller into the
Qt window, plus the optional global hotkey and spoken alerts.
"""

import logging
import sys
from typing import Callable, Optional

import keyboard
from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtWidgets import QApplication

from remindly.config import Settings, load_settings
from remindly.core.notification_gateway import CenterNotificationGateway
from remindly.core.reminder_controller import ReminderController
from remindly.memory.reminder_store import ReminderStore
from remindly.tools.notification_center import DesktopNotificationCenter, NotificationSpoolError
from remindly.ui.main_window import ReminderListWindow
from remindly.voice.voice_output import AlertAnnouncer

logger = logging.getLogger(__name__)


class MainThreadDispatcher(QObject):
    """
    Runs callables on the Qt main thread.

    Create it on the main thread; calling it from any thread queues the
    callable through a signal.
    """

    _invoke = pyqtSignal(object)

    def __init__(self):
        super().__init__()
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def _run(self, callback: Callable[[], None]):
        try:
            callback()
        except Exception as e:
            logger.error(f"Dispatched callback failed: {e}", exc_info=True)

    def __call__(self, callback: Callable[[], None]):
        self._invoke.emit(callback)


def register_global_hotkey(hotkey: str, callback: Callable[[], None]) -> bool:
    """
    Register a system-wide hotkey.

    The callback runs on the keyboard library's thread.

    Returns:
        True if registered
    """
    if not hotkey:
        return False
    try:
        keyboard.add_hotkey(hotkey, callback)
    except Exception as e:
        # Linux needs root for global hooks
        logger.warning(f"Hotkey registration failed: {e}")
        return False
    logger.info(f"Global hotkey ready ({hotkey})")
    return True


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv: Optional[list] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName("Remindly")

    dispatch = MainThreadDispatcher()

    try:
        center = DesktopNotificationCenter(
            spool_path=settings.spool_path,
            timeout=settings.notification_timeout
        )
    except NotificationSpoolError as e:
        logger.error(f"Failed to initialize notification center: {e}", exc_info=True)
        return 1

    store = ReminderStore()
    gateway = CenterNotificationGateway(center)
    controller = ReminderController(store, gateway, dispatch=dispatch)

    announcer: Optional[AlertAnnouncer] = None
    if settings.speak_alerts:
        try:
            announcer = AlertAnnouncer(rate=settings.speech_rate)
            center.add_delivery_listener(announcer.announce)
        except Exception as e:
            logger.warning(f"TTS init failed: {e}")
            announcer = None

    window = ReminderListWindow(controller, refresh_seconds=settings.refresh_seconds)

    def _show_add_form():
        window.activateWindow()
        window.open_add_form()

    def _on_hotkey():
        dispatch(_show_add_form)

    hotkey_registered = register_global_hotkey(settings.global_hotkey, _on_hotkey)

    window.show()
    logger.info("Remindly is ready")

    try:
        return app.exec()
    finally:
        if hotkey_registered:
            try:
                keyboard.remove_all_hotkeys()
            except Exception as e:
                logger.debug(f"Hotkey cleanup failed: {e}")
        if announcer is not None:
            announcer.shutdown()
        center.shutdown()


if __name__ == "__main__":
    sys.exit(main())
