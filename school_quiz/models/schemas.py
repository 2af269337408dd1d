# school_quiz/models/schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models import OPTIONS_PER_QUESTION

class GeneratedQuestion(BaseModel):
    """One item returned by the content-generation service"""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(min_length=1)
    options: List[str] = Field(min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION)
    correct_answer: int = Field(alias="correctAnswer", ge=0, le=OPTIONS_PER_QUESTION - 1)

class StartTestRequest(BaseModel):
    student_name: str = ""

class SelectOptionRequest(BaseModel):
    option_index: int

class SettingsUpdateRequest(BaseModel):
    """Partial settings update; omitted fields keep their current value"""

    grade: Optional[str] = None
    subject: Optional[str] = None
    duration_minutes: Optional[int] = None

    @field_validator("grade", mode="before")
    @classmethod
    def grade_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

class QuestionCreateRequest(BaseModel):
    text: str
    options: List[str]
    correct_answer: int

class GenerateRequest(BaseModel):
    count: Optional[int] = None

