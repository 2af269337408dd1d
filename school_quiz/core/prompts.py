# school_quiz/core/prompts.py

class PromptTemplates:
    """Centralized prompt template management"""

    SYSTEM_PROMPT = (
        "You are an experienced school teacher who writes clear, accurate "
        "multiple-choice test questions. You always answer with valid JSON only."
    )

    @staticmethod
    def create_batch_questions_prompt(subject: str, grade: str, question_count: int) -> str:
        """Create prompt for one batch of multiple-choice questions"""
        return f"""Generate {question_count} unique {subject} multiple-choice questions for a student in Grade {grade}.

REQUIREMENTS:
- Generate exactly {question_count} questions
- The questions should range in difficulty suitable for Grade {grade}
- Cover various topics within {subject} appropriate for the grade
- Provide exactly 4 options for each question with only 1 correct answer
- "correctAnswer" is the index (0-3) of the correct option in "options"
- Do not number the options or prefix them with letters

Respond with a JSON object in exactly this format:
{{"questions": [{{"text": "The question text", "options": ["first", "second", "third", "fourth"], "correctAnswer": 0}}]}}"""

class PromptFormatter:
    """Utility class for cleaning LLM responses before parsing"""

    @staticmethod
    def strip_code_fences(response: str) -> str:
        """Remove markdown code fences some models wrap around JSON"""
        cleaned = response.strip()

        if cleaned.startswith("```"):
            cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
            if cleaned.rstrip().endswith("```"):
                cleaned = cleaned.rstrip()[:-3]

        return cleaned.strip()
