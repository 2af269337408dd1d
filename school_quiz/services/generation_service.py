# school_quiz/services/generation_service.py
import logging
from typing import Callable, List, Optional

from ..core.ai_services import AIService, get_ai_service
from ..core.config import config
from ..core.exceptions import GenerationError
from ..core.models import Question
from ..core.utils import generate_id

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

class QuestionGenerator:
    """Drives the generation service in sequential fixed-size batches"""

    def __init__(self, ai_service: AIService, batch_size: int = None):
        self.ai_service = ai_service
        self.batch_size = batch_size or config.GENERATION_BATCH_SIZE

    def generate(self, subject: str, grade: str, total_count: int,
                 on_progress: Optional[ProgressCallback] = None) -> List[Question]:
        """Generate total_count questions, reporting the running total after each batch.

        Fails as a whole with GenerationError if any batch fails; questions from
        earlier batches are discarded.
        """
        if total_count < 1:
            raise GenerationError("Question count must be at least 1")

        batches = -(-total_count // self.batch_size)
        logger.info(f"🚀 Generating {total_count} {subject} questions for grade {grade} in {batches} batches")

        questions: List[Question] = []

        for batch_number in range(1, batches + 1):
            batch_size = min(self.batch_size, total_count - len(questions))
            if batch_size <= 0:
                break

            try:
                items = self.ai_service.generate_question_batch(subject, grade, batch_size)
            except GenerationError as e:
                logger.error(f"❌ Batch {batch_number}/{batches} failed: {e}")
                raise
            except Exception as e:
                logger.error(f"❌ Batch {batch_number}/{batches} failed: {e}")
                raise GenerationError(f"Failed to generate batch {batch_number}: {e}") from e

            if len(items) != batch_size:
                logger.warning(f"Batch {batch_number} returned {len(items)} questions, expected {batch_size}")

            questions.extend(
                Question(
                    id=generate_id(),
                    text=item["text"],
                    options=list(item["options"]),
                    correct_answer=item["correctAnswer"],
                )
                for item in items
            )

            # an empty batch adds nothing, so there is no new progress to report
            if items and on_progress:
                on_progress(len(questions))

        logger.info(f"✅ Generated {len(questions)} questions")
        return questions

def get_question_generator() -> QuestionGenerator:
    return QuestionGenerator(get_ai_service())
