# school_quiz/core/utils.py
import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .config import config

logger = logging.getLogger(__name__)

class RepeatingTimer:
    """Handle for a callback re-armed on the event loop every interval seconds"""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self.cancelled = False
        self._arm()

    def _arm(self):
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self):
        if self.cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            logger.error(f"Timer callback failed: {e}", exc_info=True)
        if not self.cancelled:
            self._arm()

    def cancel(self):
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

class AsyncioScheduler:
    """Schedules recurring callbacks on the running asyncio event loop.

    Callbacks run on the loop thread, so they never interleave with request
    handlers running on the same loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_every(self, interval: float, callback: Callable[[], None]) -> RepeatingTimer:
        loop = self._loop or asyncio.get_running_loop()
        return RepeatingTimer(loop, interval, callback)

class SessionRegistry:
    """In-memory registry of test sessions served over HTTP"""

    def __init__(self):
        self.sessions: Dict[str, Any] = {}

    def add(self, session) -> str:
        self.cleanup_expired()
        self.sessions[session.session_id] = session
        logger.info(f"✅ Session registered: {session.session_id}")
        return session.session_id

    def get(self, session_id: str):
        return self.sessions.get(session_id)

    def remove(self, session_id: str):
        """Drop a session and stop its countdown"""
        session = self.sessions.pop(session_id, None)
        if session is not None:
            session.close()
            logger.info(f"✅ Session removed: {session_id}")
        return session

    def cleanup_expired(self):
        """Drop sessions that finished longer ago than the retention window"""
        now = time.time()
        expired = [
            session_id for session_id, session in self.sessions.items()
            if session.finished_at is not None and now - session.finished_at > config.SESSION_RETENTION_SECONDS
        ]

        for session_id in expired:
            self.remove(session_id)

        if expired:
            logger.info(f"🧹 Cleanup: removed {len(expired)} finished sessions")

    def close_all(self):
        """Stop every countdown; used on shutdown"""
        for session_id in list(self.sessions):
            self.remove(session_id)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "active_sessions": sum(1 for s in self.sessions.values() if not s.is_finished),
            "total_sessions": len(self.sessions),
        }

class ValidationUtils:
    """Utility functions for data validation"""

    @staticmethod
    def clean_student_name(name: Optional[str]) -> str:
        return (name or "").strip()

    @staticmethod
    def is_valid_subject(subject: Any) -> bool:
        return subject in config.SUBJECTS

    @staticmethod
    def is_valid_grade(grade: Any) -> bool:
        """Grades are free text in storage but must be a number in range"""
        if grade == "":
            return True
        try:
            value = int(str(grade).strip())
        except (ValueError, TypeError):
            return False
        return config.MIN_GRADE <= value <= config.MAX_GRADE

    @staticmethod
    def is_valid_duration(duration: Any) -> bool:
        return isinstance(duration, int) and not isinstance(duration, bool) and duration > 0

class DateTimeUtils:
    """Utility functions for date/time operations"""

    @staticmethod
    def get_current_timestamp() -> float:
        return time.time()

    @staticmethod
    def utc_now_iso() -> str:
        """ISO 8601 timestamp in UTC with millisecond precision"""
        return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def format_countdown(seconds: int) -> str:
        """Format remaining seconds as m:ss"""
        seconds = max(0, int(seconds))
        return f"{seconds // 60}:{seconds % 60:02d}"

def generate_id() -> str:
    """Generate unique identifier"""
    return str(uuid.uuid4())
