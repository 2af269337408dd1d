# school_quiz/services/storage_service.py
import logging
from typing import List, Optional

from ..core.config import config
from ..core.database import DocumentStore, get_document_store
from ..core.models import TestSettings, StudentResult

logger = logging.getLogger(__name__)

class SettingsRepository:
    """Reads and overwrites the single settings document"""

    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self) -> TestSettings:
        data = self.store.get(config.SETTINGS_KEY)
        if data is None:
            return TestSettings.from_dict(config.default_settings())

        # Documents saved before subjects existed
        if not data.get("subject"):
            data["subject"] = config.DEFAULT_SUBJECT

        return TestSettings.from_dict(data)

    def save(self, settings: TestSettings) -> None:
        self.store.set(config.SETTINGS_KEY, settings.to_dict())
        logger.info(f"✅ Settings saved: {settings.subject}, grade {settings.grade}, "
                    f"{settings.duration_minutes} min, {len(settings.questions)} questions")

class ResultsRepository:
    """Newest-first history of submitted results"""

    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self) -> List[StudentResult]:
        data = self.store.get(config.RESULTS_KEY)
        if not data:
            return []
        return [StudentResult.from_dict(item) for item in data]

    def get(self, result_id: str) -> Optional[StudentResult]:
        return next((r for r in self.list() if r.id == result_id), None)

    def prepend(self, result: StudentResult) -> None:
        current = self.store.get(config.RESULTS_KEY) or []
        self.store.set(config.RESULTS_KEY, [result.to_dict()] + current)
        logger.info(f"✅ Result saved: {result.id} ({result.student_name} {result.score}/{result.total_questions})")

    def clear(self) -> None:
        self.store.remove(config.RESULTS_KEY)
        logger.info("🧹 All results cleared")

def get_settings_repository() -> SettingsRepository:
    return SettingsRepository(get_document_store())

def get_results_repository() -> ResultsRepository:
    return ResultsRepository(get_document_store())
