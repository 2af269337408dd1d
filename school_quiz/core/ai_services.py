# school_quiz/core/ai_services.py
import json
import logging
import time
from typing import List, Dict, Any

from groq import Groq
from pydantic import ValidationError as SchemaError

from .config import config
from .dummy_data import get_dummy_questions
from .exceptions import GenerationError
from .prompts import PromptTemplates, PromptFormatter
from ..models.schemas import GeneratedQuestion

logger = logging.getLogger(__name__)

class AIService:
    """Client for the external content-generation service (one batch per call)"""

    def __init__(self, client=None, use_dummy: bool = None):
        self.client = client
        self.use_dummy = config.USE_DUMMY_DATA if use_dummy is None else use_dummy
        self._dummy_cursor = 0

        if self.use_dummy:
            logger.info("🔧 AI Service in dummy mode - using offline question templates")
        elif self.client is None:
            self._init_groq_client()

    def _init_groq_client(self):
        """Initialize Groq client"""
        if not config.GROQ_API_KEY:
            raise GenerationError("AI service initialization failed: GROQ_API_KEY not provided")

        self.client = Groq(api_key=config.GROQ_API_KEY, timeout=config.GROQ_TIMEOUT)
        logger.info(f"✅ Groq client initialized ({config.GROQ_MODEL})")

    def generate_question_batch(self, subject: str, grade: str, question_count: int) -> List[Dict[str, Any]]:
        """Request question_count multiple-choice items; returns validated raw items.

        Any transport, JSON or schema failure raises GenerationError. The number
        of returned items is whatever the service delivered.
        """
        logger.info(f"🤖 Requesting {question_count} {subject} questions for grade {grade} (dummy: {self.use_dummy})")

        if self.use_dummy:
            items = get_dummy_questions(subject, question_count, offset=self._dummy_cursor)
            self._dummy_cursor += question_count
            return items

        if not self.client:
            raise GenerationError("AI service not available")

        prompt = PromptTemplates.create_batch_questions_prompt(subject, grade, question_count)

        try:
            completion = self.client.chat.completions.create(
                model=config.GROQ_MODEL,
                messages=[
                    {"role": "system", "content": PromptTemplates.SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=config.GROQ_TEMPERATURE,
                max_completion_tokens=config.GROQ_MAX_TOKENS,
                top_p=config.GROQ_TOP_P,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            logger.error(f"❌ LLM call failed: {e}")
            raise GenerationError(f"Question generation request failed: {e}") from e

        if not completion.choices or not completion.choices[0].message.content:
            raise GenerationError("LLM returned no response")

        return self.parse_questions_response(completion.choices[0].message.content)

    @staticmethod
    def parse_questions_response(response: str) -> List[Dict[str, Any]]:
        """Parse and validate a JSON question array from the service response"""
        try:
            data = json.loads(PromptFormatter.strip_code_fences(response))
        except json.JSONDecodeError as e:
            raise GenerationError(f"Malformed response from generation service: {e}") from e

        if isinstance(data, dict):
            data = data.get("questions")

        if not isinstance(data, list):
            raise GenerationError("Generation service response is not a question array")

        items = []
        for index, raw in enumerate(data):
            try:
                question = GeneratedQuestion.model_validate(raw)
            except SchemaError as e:
                raise GenerationError(f"Generated question {index + 1} violates the schema: {e}") from e

            items.append(question.model_dump(by_alias=True))

        return items

    def health_check(self) -> Dict[str, Any]:
        """Check AI service health"""
        if self.use_dummy:
            return {
                "status": "healthy",
                "mode": "dummy",
                "client_ready": True,
                "message": "Running in dummy data mode"
            }

        try:
            if not self.client:
                return {"status": "error", "message": "Client not initialized"}

            start_time = time.time()
            test_response = self.client.chat.completions.create(
                model=config.GROQ_MODEL,
                messages=[{"role": "user", "content": "ping"}],
                max_completion_tokens=5
            )
            response_time = time.time() - start_time

            if test_response.choices:
                return {
                    "status": "healthy",
                    "mode": "live",
                    "model": config.GROQ_MODEL,
                    "response_time_ms": round(response_time * 1000, 2),
                    "client_ready": True
                }
            return {"status": "error", "message": "No response from LLM"}

        except Exception as e:
            return {"status": "error", "message": str(e)}

# Singleton pattern for AI service
_ai_service = None

def get_ai_service() -> AIService:
    """Get AI service instance (singleton)"""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service

def close_ai_service():
    """Close AI service instance"""
    global _ai_service
    if _ai_service:
        _ai_service = None
