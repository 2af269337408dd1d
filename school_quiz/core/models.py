# school_quiz/core/models.py
"""
Domain models shared by the storage, generation and test services.

Documents are persisted in the camelCase shape used by the browser front end,
so every model converts to and from that shape explicitly.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional

UNANSWERED = -1
OPTIONS_PER_QUESTION = 4


class SessionState(Enum):
    LOGIN = "login"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class Question:
    """Multiple-choice question with exactly four options"""

    id: str
    text: str
    options: List[str]
    correct_answer: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        return cls(
            id=str(data["id"]),
            text=data["text"],
            options=list(data["options"]),
            correct_answer=int(data["correctAnswer"]),
        )

    def is_correct(self, selected: int) -> bool:
        return selected != UNANSWERED and selected == self.correct_answer


@dataclass
class TestSettings:
    """The single active test configuration"""

    __test__ = False

    grade: str
    subject: str
    duration_minutes: int
    questions: List[Question] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grade": self.grade,
            "subject": self.subject,
            "durationMinutes": self.duration_minutes,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TestSettings':
        return cls(
            grade=str(data["grade"]),
            subject=data["subject"],
            duration_minutes=int(data["durationMinutes"]),
            questions=[Question.from_dict(q) for q in data.get("questions", [])],
        )

    def snapshot(self) -> 'TestSettings':
        """Independent copy for a session; later edits never reach it"""
        return copy.deepcopy(self)


@dataclass(frozen=True)
class StudentResult:
    """Immutable record of one submitted test"""

    id: str
    student_name: str
    score: int
    total_questions: int
    date: str
    answers: List[int]
    questions: Optional[List[Question]] = None
    subject: Optional[str] = None

    @property
    def percentage(self) -> int:
        if not self.total_questions:
            return 0
        return round(self.score / self.total_questions * 100)

    @property
    def has_details(self) -> bool:
        return self.questions is not None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "studentName": self.student_name,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "date": self.date,
            "answers": list(self.answers),
        }
        if self.questions is not None:
            data["questions"] = [q.to_dict() for q in self.questions]
        if self.subject is not None:
            data["subject"] = self.subject
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StudentResult':
        questions = data.get("questions")
        return cls(
            id=str(data["id"]),
            student_name=data["studentName"],
            score=int(data["score"]),
            total_questions=int(data["totalQuestions"]),
            date=data["date"],
            answers=[int(a) for a in data.get("answers", [])],
            questions=[Question.from_dict(q) for q in questions] if questions is not None else None,
            subject=data.get("subject"),
        )
