from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from school_quiz.core.database import DocumentStore, InMemoryDocumentStore
from school_quiz.core.exceptions import PersistenceError
from school_quiz.core.models import Question, TestSettings
from school_quiz.services.result_recorder import ResultRecorder
from school_quiz.services.storage_service import ResultsRepository, SettingsRepository


# ====================
# Fakes
# ====================

class ManualTimer:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Fires timer callbacks only when the test calls tick()."""

    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            for timer in self.active_timers:
                timer.callback()


class ScriptedAIService:
    """Stands in for AIService; each call consumes the next scripted batch.

    A script entry is either a list of raw items, an exception to raise, or
    None to return exactly as many items as were requested.
    """

    def __init__(self, script: List[Any] | None = None) -> None:
        self.script = list(script or [])
        self.calls: List[tuple] = []

    def generate_question_batch(self, subject: str, grade: str, question_count: int):
        self.calls.append((subject, grade, question_count))
        entry = self.script.pop(0) if self.script else None
        if isinstance(entry, Exception):
            raise entry
        if entry is None:
            return make_raw_items(question_count, prefix=f"{subject}-{len(self.calls)}")
        return entry


class FailingStore(InMemoryDocumentStore):
    """In-memory store whose writes fail while fail_writes is set."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_writes = True

    def set(self, key: str, document: Any) -> None:
        if self.fail_writes:
            raise PersistenceError(f"Failed to write '{key}': disk full")
        super().set(key, document)


def make_raw_items(count: int, prefix: str = "Q") -> List[dict]:
    return [
        {
            "text": f"{prefix} question {i + 1}?",
            "options": ["A", "B", "C", "D"],
            "correctAnswer": i % 4,
        }
        for i in range(count)
    ]


def make_questions(count: int = 5) -> List[Question]:
    return [
        Question(
            id=f"q-{i + 1}",
            text=f"What is {i} + {i}?",
            options=[str(2 * i), str(2 * i + 1), str(2 * i + 2), str(2 * i + 3)],
            correct_answer=i % 4,
        )
        for i in range(count)
    ]


# ====================
# Fixtures
# ====================

@pytest.fixture
def store() -> DocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def settings_repo(store) -> SettingsRepository:
    return SettingsRepository(store)


@pytest.fixture
def results_repo(store) -> ResultsRepository:
    return ResultsRepository(store)


@pytest.fixture
def recorder(results_repo) -> ResultRecorder:
    return ResultRecorder(results_repo)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def sample_questions() -> List[Question]:
    return make_questions(5)


@pytest.fixture
def sample_settings(sample_questions) -> TestSettings:
    return TestSettings(grade="5", subject="Mathematics", duration_minutes=1, questions=sample_questions)


@pytest.fixture
def saved_settings(settings_repo, sample_settings) -> TestSettings:
    settings_repo.save(sample_settings)
    return sample_settings
