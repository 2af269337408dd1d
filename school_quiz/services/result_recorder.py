# school_quiz/services/result_recorder.py
import logging
from typing import List

from ..core.models import Question, StudentResult
from ..core.utils import DateTimeUtils, generate_id
from .storage_service import ResultsRepository, get_results_repository

logger = logging.getLogger(__name__)

def calculate_score(questions: List[Question], answers: List[int]) -> int:
    """Count answers that match their question's correct option"""
    return sum(1 for question, answer in zip(questions, answers) if question.is_correct(answer))

class ResultRecorder:
    """Builds the result snapshot for a finished session and appends it to history"""

    def __init__(self, results: ResultsRepository):
        self.results = results

    def build(self, session) -> StudentResult:
        questions = list(session.settings.questions)
        answers = list(session.answers)

        return StudentResult(
            id=generate_id(),
            student_name=session.student_name,
            score=calculate_score(questions, answers),
            total_questions=len(questions),
            date=DateTimeUtils.utc_now_iso(),
            answers=answers,
            questions=questions,
            subject=session.settings.subject,
        )

    def record(self, session) -> StudentResult:
        """Snapshot the session and prepend it to history.

        PersistenceError propagates unretried; nothing is kept in that case.
        """
        result = self.build(session)
        self.results.prepend(result)
        logger.info(f"🏁 Recorded result {result.id}: {result.score}/{result.total_questions}")
        return result

def get_result_recorder() -> ResultRecorder:
    return ResultRecorder(get_results_repository())
