# school_quiz/services/admin_service.py
import logging
from typing import Dict, Any, List, Optional

from ..core.config import config
from ..core.exceptions import GenerationError, ValidationError
from ..core.models import Question, StudentResult, OPTIONS_PER_QUESTION
from ..core.utils import ValidationUtils, generate_id
from .generation_service import ProgressCallback, QuestionGenerator, get_question_generator
from .storage_service import (
    ResultsRepository, SettingsRepository,
    get_results_repository, get_settings_repository
)

logger = logging.getLogger(__name__)

LEGACY_RESULT_MESSAGE = "Detailed question data is not available for this legacy result."

class AdminService:
    """Teacher operations: test configuration, question bank and results review"""

    def __init__(self, settings_repo: SettingsRepository, results_repo: ResultsRepository,
                 generator: QuestionGenerator):
        self.settings_repo = settings_repo
        self.results_repo = results_repo
        self.generator = generator

    # ==================== Settings ====================

    def get_settings(self) -> Dict[str, Any]:
        return self.settings_repo.load().to_dict()

    def update_settings(self, grade: Optional[str] = None, subject: Optional[str] = None,
                        duration_minutes: Optional[int] = None) -> Dict[str, Any]:
        """Apply valid fields and save; invalid fields keep their prior value"""
        settings = self.settings_repo.load()
        rejected = []

        if subject is not None:
            if ValidationUtils.is_valid_subject(subject):
                settings.subject = subject
            else:
                rejected.append("subject")

        if grade is not None:
            if ValidationUtils.is_valid_grade(grade):
                settings.grade = str(grade).strip()
            else:
                rejected.append("grade")

        if duration_minutes is not None:
            if ValidationUtils.is_valid_duration(duration_minutes):
                settings.duration_minutes = duration_minutes
            else:
                rejected.append("duration_minutes")

        if rejected:
            logger.warning(f"Refused settings input: {rejected}")

        self.settings_repo.save(settings)

        return {
            "settings": settings.to_dict(),
            "rejected_fields": rejected,
            "message": "Settings saved successfully.",
        }

    # ==================== Question bank ====================

    def add_question(self, text: str, options: List[str], correct_answer: int) -> Dict[str, Any]:
        text = (text or "").strip()
        options = [str(option).strip() for option in options or []]

        if not text:
            raise ValidationError("Question text is required")
        if len(options) != OPTIONS_PER_QUESTION or not all(options):
            raise ValidationError(f"Exactly {OPTIONS_PER_QUESTION} non-empty options are required")
        if not 0 <= correct_answer < OPTIONS_PER_QUESTION:
            raise ValidationError(f"Correct answer must be between 0 and {OPTIONS_PER_QUESTION - 1}")

        question = Question(id=generate_id(), text=text, options=options, correct_answer=correct_answer)

        settings = self.settings_repo.load()
        settings.questions.append(question)
        self.settings_repo.save(settings)

        logger.info(f"✅ Question added manually: {question.id}")
        return question.to_dict()

    def remove_question(self, question_id: str) -> bool:
        settings = self.settings_repo.load()
        remaining = [q for q in settings.questions if q.id != question_id]

        if len(remaining) == len(settings.questions):
            return False

        settings.questions = remaining
        self.settings_repo.save(settings)
        logger.info(f"✅ Question removed: {question_id}")
        return True

    def generate_questions(self, count: Optional[int] = None,
                           on_progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
        """Regenerate the whole question bank; settings change only on full success"""
        if count is None:
            count = config.DEFAULT_QUESTION_COUNT
        if not 1 <= count <= config.MAX_QUESTION_COUNT:
            raise ValidationError(f"Question count must be between 1 and {config.MAX_QUESTION_COUNT}")

        settings = self.settings_repo.load()
        questions = self.generator.generate(settings.subject, settings.grade, count, on_progress)

        if not questions:
            raise GenerationError("Generation service returned no questions")

        settings.questions = questions
        self.settings_repo.save(settings)

        return {
            "settings": settings.to_dict(),
            "generated": len(questions),
            "message": f"Successfully generated {len(questions)} new {settings.subject} questions!",
        }

    # ==================== Results ====================

    def list_results(self) -> List[Dict[str, Any]]:
        return [self._summarize(result) for result in self.results_repo.list()]

    def get_result_detail(self, result_id: str) -> Optional[Dict[str, Any]]:
        result = self.results_repo.get(result_id)
        if result is None:
            return None

        detail = self._summarize(result)
        detail["detail_available"] = result.has_details

        if not result.has_details:
            detail["message"] = LEGACY_RESULT_MESSAGE
            detail["questions"] = []
            return detail

        rows = []
        for index, question in enumerate(result.questions):
            selected = result.answers[index] if index < len(result.answers) else -1
            rows.append({
                "question_number": index + 1,
                "text": question.text,
                "options": list(question.options),
                "selected_option": selected,
                "correct_option": question.correct_answer,
                "is_correct": question.is_correct(selected),
            })
        detail["questions"] = rows
        return detail

    def clear_results(self) -> Dict[str, Any]:
        self.results_repo.clear()
        return {"message": "All student results cleared."}

    @staticmethod
    def _summarize(result: StudentResult) -> Dict[str, Any]:
        ratio = result.score / result.total_questions if result.total_questions else 0
        return {
            "id": result.id,
            "student_name": result.student_name,
            "subject": result.subject,
            "score": result.score,
            "total_questions": result.total_questions,
            "percentage": result.percentage,
            "passed": ratio >= config.PASS_THRESHOLD,
            "date": result.date,
        }

# Singleton pattern for admin service
_admin_service = None

def get_admin_service() -> AdminService:
    """Get admin service instance (singleton)"""
    global _admin_service
    if _admin_service is None:
        _admin_service = AdminService(
            get_settings_repository(), get_results_repository(), get_question_generator()
        )
    return _admin_service
