"""
Remindly Notification Center - Desktop Notification Scheduling

This is NOT reminder logic - it is pure OS glue standing in for the
platform's notification daemon.

Responsibilities:
- Hold pending notification requests keyed by identifier
- Arm one timer per request and deliver through plyer
- Spool pending requests to JSON so they survive an app restart

Rules:
- Adding with an existing identifier replaces the old request
- Removing unknown identifiers is a no-op
- A calendar match already in the past never fires
- A time interval must be greater than 0
"""

import json
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from plyer import notification
from plyer.utils import platform as plyer_platform

from remindly.memory.reminder_models import naive_local

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification request cannot be scheduled or delivered"""
    pass


class NotificationSpoolError(NotificationError):
    """Raised when the pending-request spool cannot be initialized"""
    pass


# ============================================================================
# TRIGGERS
# ============================================================================

@dataclass(frozen=True)
class CalendarTrigger:
    """Fire once at the minute matching these date components"""
    year: int
    month: int
    day: int
    hour: int
    minute: int

    @classmethod
    def from_date(cls, when: datetime) -> 'CalendarTrigger':
        return cls(
            year=when.year,
            month=when.month,
            day=when.day,
            hour=when.hour,
            minute=when.minute
        )

    def next_fire_date(self, now: datetime) -> Optional[datetime]:
        """
        Next matching instant after `now`.

        Returns:
            Fire datetime, or None when the match is already in the past
        """
        fire_at = datetime(self.year, self.month, self.day, self.hour, self.minute)
        return fire_at if fire_at > now else None

    def to_dict(self) -> dict:
        return {
            'type': 'calendar',
            'year': self.year,
            'month': self.month,
            'day': self.day,
            'hour': self.hour,
            'minute': self.minute
        }


@dataclass(frozen=True)
class TimeIntervalTrigger:
    """Fire once after a countdown in seconds"""
    seconds: float

    def next_fire_date(self, now: datetime) -> Optional[datetime]:
        if self.seconds <= 0:
            raise NotificationError("time interval must be greater than 0")
        return now + timedelta(seconds=self.seconds)

    def to_dict(self) -> dict:
        return {'type': 'interval', 'seconds': self.seconds}


Trigger = Union[CalendarTrigger, TimeIntervalTrigger]


def trigger_from_dict(data: dict) -> Trigger:
    """Rebuild a trigger from its spooled form"""
    kind = data.get('type')
    if kind == 'calendar':
        return CalendarTrigger(
            year=data['year'],
            month=data['month'],
            day=data['day'],
            hour=data['hour'],
            minute=data['minute']
        )
    if kind == 'interval':
        return TimeIntervalTrigger(seconds=float(data['seconds']))
    raise ValueError(f"Unknown trigger type: {kind}")


# ============================================================================
# REQUESTS
# ============================================================================

@dataclass(frozen=True)
class NotificationContent:
    title: str
    body: str
    sound: str = "default"


@dataclass(frozen=True)
class NotificationRequest:
    """
    A scheduled notification.

    `fire_at` is resolved by the center when the request is added.
    """
    identifier: str
    content: NotificationContent
    trigger: Trigger
    fire_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            'identifier': self.identifier,
            'title': self.content.title,
            'body': self.content.body,
            'sound': self.content.sound,
            'trigger': self.trigger.to_dict(),
            'fire_at': self.fire_at.isoformat() if self.fire_at else None
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'NotificationRequest':
        fire_at = data.get('fire_at')
        return cls(
            identifier=data['identifier'],
            content=NotificationContent(
                title=data['title'],
                body=data['body'],
                sound=data.get('sound', 'default')
            ),
            trigger=trigger_from_dict(data['trigger']),
            fire_at=naive_local(datetime.fromisoformat(fire_at)) if fire_at else None
        )


AddCompletion = Callable[[Optional[Exception]], None]
AuthorizationCompletion = Callable[[bool, Optional[Exception]], None]
PendingCompletion = Callable[[List[NotificationRequest]], None]
DeliveryListener = Callable[[NotificationRequest], None]


def notify_desktop(request: NotificationRequest, app_name: str, timeout: int):
    """Show a desktop notification through plyer"""
    notification.notify(
        title=request.content.title,
        message=request.content.body,
        app_name=app_name,
        timeout=timeout
    )


class DesktopNotificationCenter:
    """
    Pending-request registry with timed delivery.

    Storage location: <home>/pending_notifications.json

    Philosophy:
    - Timers run on daemon threads, guarded by one lock
    - Completions run on worker threads; callers marshal them
    - Spool is rewritten atomically after every change
    """

    def __init__(
        self,
        spool_path: Path,
        app_name: str = "Remindly",
        timeout: int = 10,
        deliver: Optional[Callable[[NotificationRequest], None]] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize notification center and re-arm spooled requests.

        Args:
            spool_path: JSON file holding pending requests
            app_name: Application name shown by the desktop
            timeout: Seconds a notification stays on screen
            deliver: Delivery function (default: plyer desktop notification)
            clock: Source of the current time
        """
        self.spool_path = spool_path
        self.app_name = app_name
        self.timeout = timeout
        self._deliver = deliver or (lambda request: notify_desktop(request, self.app_name, self.timeout))
        self._clock = clock

        self._lock = threading.RLock()
        self._pending: Dict[str, NotificationRequest] = {}
        self._timers: Dict[str, threading.Timer] = {}
        self._listeners: List[DeliveryListener] = []

        try:
            self.spool_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create spool directory: {e}")
            raise NotificationSpoolError(f"Cannot create spool directory: {e}") from e
        if not self.spool_path.exists():
            self._initialize_spool()

        self._restore_spool()
        logger.info(f"DesktopNotificationCenter initialized: {self.spool_path}")

    # ------------------------------------------------------------------
    # Spool
    # ------------------------------------------------------------------

    def _initialize_spool(self):
        """Create empty spool file"""
        try:
            with open(self.spool_path, 'w', encoding='utf-8') as f:
                json.dump({"requests": []}, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to initialize spool: {e}")
            raise NotificationSpoolError(f"Cannot initialize spool: {e}") from e

    def _load_spool(self) -> List[NotificationRequest]:
        try:
            with open(self.spool_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Corrupted notification spool: {e}")
            self._backup_and_reset()
            return []
        except FileNotFoundError:
            logger.warning("Spool file not found, initializing")
            self._initialize_spool()
            return []
        except OSError as e:
            logger.error(f"Failed to read notification spool: {e}", exc_info=True)
            raise NotificationSpoolError(f"Cannot read spool: {e}") from e

        items = data.get('requests') if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.error(f"Notification spool has unexpected shape: {type(data).__name__}")
            self._backup_and_reset()
            return []

        requests = []
        for item in items:
            try:
                requests.append(NotificationRequest.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid spooled request: {e}")
        return requests

    def _save_spool(self):
        """Write the pending set (temp file, then rename). Caller holds the lock."""
        data = {"requests": [r.to_dict() for r in self._pending.values()]}
        temp_path = self.spool_path.with_suffix('.tmp')
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.spool_path)
        except OSError as e:
            logger.error(f"Failed to save notification spool: {e}", exc_info=True)
            return
        logger.debug(f"Spooled {len(self._pending)} pending request(s)")

    def _backup_and_reset(self):
        backup_path = self.spool_path.with_suffix('.json.bak')
        try:
            if self.spool_path.exists():
                self.spool_path.replace(backup_path)
                logger.warning(f"Backed up corrupted spool to: {backup_path}")
        except OSError as e:
            logger.error(f"Failed to back up spool: {e}", exc_info=True)
        self._initialize_spool()

    def _restore_spool(self):
        now = self._clock()
        with self._lock:
            for request in self._load_spool():
                if request.fire_at is None:
                    continue
                if request.fire_at <= now:
                    logger.info(f"Request {request.identifier} came due while closed, delivering now")
                self._arm(request, now)
            self._save_spool()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _arm(self, request: NotificationRequest, now: datetime):
        """Register a request and start its timer. Caller holds the lock."""
        self._disarm(request.identifier)
        delay = max(0.0, (request.fire_at - now).total_seconds())
        timer = threading.Timer(delay, self._fire, args=(request,))
        timer.daemon = True
        timer.name = f"Remindly-Notify-{request.identifier[:8]}"
        self._pending[request.identifier] = request
        self._timers[request.identifier] = timer
        timer.start()

    def _disarm(self, identifier: str) -> bool:
        timer = self._timers.pop(identifier, None)
        if timer is not None:
            timer.cancel()
        return self._pending.pop(identifier, None) is not None

    def _fire(self, request: NotificationRequest):
        with self._lock:
            # Replaced or removed while this timer was waiting
            if self._pending.get(request.identifier) is not request:
                return
            self._pending.pop(request.identifier, None)
            self._timers.pop(request.identifier, None)
            self._save_spool()
            listeners = list(self._listeners)

        logger.info(f"Delivering notification {request.identifier}: {request.content.title}")
        try:
            self._deliver(request)
        except Exception as e:
            logger.error(f"Notification delivery failed: {e}", exc_info=True)
            return

        for listener in listeners:
            try:
                listener(request)
            except Exception as e:
                logger.error(f"Delivery listener failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request_authorization(self, completion: AuthorizationCompletion):
        """
        Check whether desktop notifications can be shown (asynchronous).

        Args:
            completion: Called on a worker thread with (granted, error)
        """
        def _worker():
            system = str(plyer_platform)
            if system == 'unknown':
                completion(False, NotificationError("desktop notifications are not supported on this platform"))
            else:
                logger.debug(f"Notification backend available for {system}")
                completion(True, None)

        threading.Thread(target=_worker, daemon=True, name="Remindly-Auth").start()

    def add(self, request: NotificationRequest, completion: Optional[AddCompletion] = None):
        """
        Schedule a request, replacing any request with the same identifier.

        Args:
            request: Request to schedule
            completion: Called with None on success or the error
        """
        error: Optional[Exception] = None
        now = self._clock()
        try:
            fire_at = request.trigger.next_fire_date(now)
        except NotificationError as e:
            error = e
        else:
            with self._lock:
                if fire_at is None:
                    # Calendar match is in the past; it would never fire
                    self._disarm(request.identifier)
                    logger.info(f"Request {request.identifier} has no future fire date, not kept")
                else:
                    self._arm(replace(request, fire_at=fire_at), now)
                    logger.info(f"Scheduled {request.identifier} at {fire_at.isoformat()}")
                self._save_spool()

        if completion:
            completion(error)

    def remove_pending(self, identifiers: Iterable[str]):
        """Cancel pending requests; unknown identifiers are ignored"""
        with self._lock:
            removed = [i for i in identifiers if self._disarm(i)]
            if removed:
                self._save_spool()
        if removed:
            logger.info(f"Removed {len(removed)} pending request(s)")

    def pending_requests(self, completion: PendingCompletion):
        """
        Snapshot of the pending set (asynchronous).

        Args:
            completion: Called on a worker thread with the pending requests
        """
        def _worker():
            with self._lock:
                snapshot = list(self._pending.values())
            completion(snapshot)

        threading.Thread(target=_worker, daemon=True, name="Remindly-Pending").start()

    def pending_identifiers(self) -> List[str]:
        with self._lock:
            return list(self._pending)

    def add_delivery_listener(self, listener: DeliveryListener):
        """Listener runs on the timer thread after each delivery"""
        with self._lock:
            self._listeners.append(listener)

    def shutdown(self):
        """
        Stop all timers.

        Pending requests stay in the spool and are re-armed on next start.
        """
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
        logger.info("DesktopNotificationCenter shutdown complete")
