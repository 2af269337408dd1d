# school_quiz/services/test_service.py
import html
import logging
import string
from typing import Dict, Any, Optional

import markdown

from ..core.config import config
from ..core.exceptions import PersistenceError, SessionNotFoundError, SessionStateError, TestUnavailableError
from ..core.models import SessionState, StudentResult, TestSettings, UNANSWERED
from ..core.utils import AsyncioScheduler, DateTimeUtils, SessionRegistry, ValidationUtils, generate_id
from .result_recorder import ResultRecorder, get_result_recorder
from .storage_service import SettingsRepository, get_settings_repository

logger = logging.getLogger(__name__)

class TestSession:
    """One student's attempt: LOGIN -> IN_PROGRESS -> SUBMITTED.

    The settings are snapshotted at construction, so admin edits made while the
    test runs never reach it. The countdown is owned by the session and is
    cancelled on every exit path (submit, timeout, close).
    """

    __test__ = False

    def __init__(self, settings: TestSettings, recorder: ResultRecorder, scheduler,
                 session_id: Optional[str] = None):
        self.session_id = session_id or generate_id()
        self.settings = settings.snapshot()
        self.recorder = recorder
        self.scheduler = scheduler

        self.state = SessionState.LOGIN
        self.student_name = ""
        self.current_index = 0
        self.answers = [UNANSWERED] * len(self.settings.questions)
        self.time_remaining = self.settings.duration_minutes * 60
        self.result: Optional[StudentResult] = None
        self.timed_out = False
        self.closed = False
        self.finished_at: Optional[float] = None
        self.save_error: Optional[str] = None
        self._timer = None

    @property
    def questions(self):
        return self.settings.questions

    @property
    def current_question(self):
        return self.questions[self.current_index]

    @property
    def last_index(self) -> int:
        return len(self.questions) - 1

    @property
    def is_finished(self) -> bool:
        return self.closed or self.state is SessionState.SUBMITTED

    def start(self, student_name: str):
        self._ensure_open()
        if self.state is not SessionState.LOGIN:
            raise SessionStateError("Test has already been started")

        name = ValidationUtils.clean_student_name(student_name)
        if not name:
            raise ValueError("Student name is required")
        if not self.questions:
            raise TestUnavailableError("The teacher has not set any questions yet.")

        self.student_name = name
        self.current_index = 0
        self.answers = [UNANSWERED] * len(self.questions)
        self.time_remaining = max(0, self.settings.duration_minutes * 60)
        self.state = SessionState.IN_PROGRESS
        logger.info(f"🚀 Test started: {self.session_id} by {name} ({len(self.questions)} questions, {self.time_remaining}s)")

        if self.time_remaining == 0:
            self.timed_out = True
            self.submit()
            return

        self._timer = self.scheduler.call_every(config.TICK_INTERVAL_SECONDS, self._tick)

    def _tick(self):
        if self.state is not SessionState.IN_PROGRESS:
            self._stop_countdown()
            return

        if self.time_remaining <= 1:
            self.time_remaining = 0
            self.timed_out = True
            logger.info(f"⏰ Time is up: {self.session_id}")
            try:
                self.submit()
            except PersistenceError as e:
                # Kept on the session and shown in its view; the next submit retries
                logger.error(f"❌ Result for timed-out session {self.session_id} not saved: {e}")
            return

        self.time_remaining -= 1

    def select_option(self, option_index: int):
        """Set the answer for the current question only"""
        self._require_in_progress()

        options = self.current_question.options
        if not 0 <= option_index < len(options):
            raise ValueError(f"Option index must be between 0 and {len(options) - 1}")

        self.answers[self.current_index] = option_index

    def go_next(self):
        self._require_in_progress()
        self.current_index = min(self.current_index + 1, self.last_index)

    def go_previous(self):
        self._require_in_progress()
        self.current_index = max(self.current_index - 1, 0)

    def submit(self) -> StudentResult:
        """Score and record once; later calls return the recorded result.

        If recording failed, a later call retries it with the frozen answers.
        """
        if self.state is SessionState.SUBMITTED:
            if self.result is None:
                self._record()
            return self.result

        self._require_in_progress()
        self._stop_countdown()
        self.state = SessionState.SUBMITTED
        self.finished_at = DateTimeUtils.get_current_timestamp()
        logger.info(f"📝 Submitting test: {self.session_id} (timed out: {self.timed_out})")

        self._record()
        return self.result

    @property
    def result_pending(self) -> bool:
        """Submitted, but the result has not been saved yet"""
        return self.state is SessionState.SUBMITTED and self.result is None

    def _record(self):
        try:
            self.result = self.recorder.record(self)
        except PersistenceError as e:
            self.save_error = str(e)
            raise
        self.save_error = None

    def close(self):
        """Tear down: stop the countdown; an unsubmitted attempt is abandoned"""
        self._stop_countdown()
        self.closed = True
        if self.finished_at is None:
            self.finished_at = DateTimeUtils.get_current_timestamp()

    def _stop_countdown(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _ensure_open(self):
        if self.closed:
            raise SessionStateError("Session has been closed")

    def _require_in_progress(self):
        self._ensure_open()
        if self.state is not SessionState.IN_PROGRESS:
            raise SessionStateError(f"Session is {self.state.value}, not in progress")

def format_session_view(session: TestSession) -> Dict[str, Any]:
    """Student-facing view of a session; correct answers are never included"""
    settings = session.settings
    total = len(session.questions)

    view = {
        "session_id": session.session_id,
        "state": session.state.value,
        "student_name": session.student_name,
        "subject": settings.subject,
        "grade": settings.grade,
        "duration_minutes": settings.duration_minutes,
        "total_questions": total,
        "answered_count": sum(1 for a in session.answers if a != UNANSWERED),
        "time_remaining": session.time_remaining,
        "time_remaining_display": DateTimeUtils.format_countdown(session.time_remaining),
        "timed_out": session.timed_out,
    }

    if session.state is SessionState.IN_PROGRESS and total:
        question = session.current_question
        view.update({
            "question_number": session.current_index + 1,
            "is_last": session.current_index == session.last_index,
            "progress": round((session.current_index + 1) / total, 4),
            "question": {
                "id": question.id,
                "text": question.text,
                "question_html": markdown.markdown(html.escape(question.text, quote=False)),
                "options": [
                    {"index": i, "label": string.ascii_uppercase[i], "text": option}
                    for i, option in enumerate(question.options)
                ],
            },
            "selected_option": session.answers[session.current_index],
        })

    if session.state is SessionState.SUBMITTED:
        view["result_saved"] = session.result is not None
        if session.save_error:
            view["save_error"] = session.save_error

    if session.result is not None:
        view["result"] = {
            "result_id": session.result.id,
            "score": session.result.score,
            "total_questions": session.result.total_questions,
            "percentage": session.result.percentage,
        }

    return view

class TestService:
    """Service for the student test flow"""

    __test__ = False

    def __init__(self, settings_repo: SettingsRepository, recorder: ResultRecorder,
                 scheduler=None, registry: Optional[SessionRegistry] = None):
        self.settings_repo = settings_repo
        self.recorder = recorder
        self.scheduler = scheduler or AsyncioScheduler()
        self.registry = registry or SessionRegistry()

    def get_availability(self) -> Dict[str, Any]:
        """What the login screen shows"""
        settings = self.settings_repo.load()
        available = len(settings.questions) > 0

        return {
            "available": available,
            "subject": settings.subject,
            "grade": settings.grade,
            "duration_minutes": settings.duration_minutes,
            "total_questions": len(settings.questions),
            "message": None if available else "The teacher has not set any questions yet.",
        }

    def start_test(self, student_name: str) -> TestSession:
        settings = self.settings_repo.load()
        if not settings.questions:
            raise TestUnavailableError("The teacher has not set any questions yet.")

        session = TestSession(settings, self.recorder, self.scheduler)
        session.start(student_name)
        self.registry.add(session)
        return session

    def get_session(self, session_id: str) -> TestSession:
        session = self.registry.get(session_id)
        if session is None:
            logger.warning(f"Session not found: {session_id}")
            raise SessionNotFoundError("Test session not found or expired")
        return session

    def get_test_state(self, session_id: str) -> TestSession:
        """Session for display; a submitted result that failed to save is retried first"""
        session = self.get_session(session_id)
        if session.result_pending and not session.closed:
            try:
                session.submit()
            except PersistenceError as e:
                # save_error stays on the session and is reported in its view
                logger.warning(f"Result for {session_id} still not saved: {e}")
        return session

    def select_option(self, session_id: str, option_index: int) -> TestSession:
        session = self.get_session(session_id)
        session.select_option(option_index)
        return session

    def go_next(self, session_id: str) -> TestSession:
        session = self.get_session(session_id)
        session.go_next()
        return session

    def go_previous(self, session_id: str) -> TestSession:
        session = self.get_session(session_id)
        session.go_previous()
        return session

    def submit_test(self, session_id: str) -> TestSession:
        session = self.get_session(session_id)
        session.submit()
        return session

    def exit_test(self, session_id: str):
        """Student leaves; the countdown stops and the session is discarded"""
        self.get_session(session_id)
        self.registry.remove(session_id)

    def shutdown(self):
        self.registry.close_all()

    def health_check(self) -> Dict[str, Any]:
        try:
            stats = self.registry.get_stats()
            return {
                "status": "healthy",
                "active_sessions": stats["active_sessions"],
                "timestamp": DateTimeUtils.get_current_timestamp()
            }
        except Exception as e:
            return {
                "status": "error",
                "message": str(e),
                "timestamp": DateTimeUtils.get_current_timestamp()
            }

# Singleton pattern for test service
_test_service = None

def get_test_service() -> TestService:
    """Get test service instance (singleton)"""
    global _test_service
    if _test_service is None:
        _test_service = TestService(get_settings_repository(), get_result_recorder())
    return _test_service

def close_test_service():
    global _test_service
    if _test_service:
        _test_service.shutdown()
        _test_service = None
