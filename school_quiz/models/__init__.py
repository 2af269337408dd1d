"""
Pydantic models for request/response validation
"""

from .schemas import (
    GeneratedQuestion,
    StartTestRequest,
    SelectOptionRequest,
    SettingsUpdateRequest,
    QuestionCreateRequest,
    GenerateRequest,
)

__all__ = [
    "GeneratedQuestion",
    "StartTestRequest",
    "SelectOptionRequest",
    "SettingsUpdateRequest",
    "QuestionCreateRequest",
    "GenerateRequest",
]
