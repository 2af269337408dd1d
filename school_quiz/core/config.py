# school_quiz/core/config.py
import os
from typing import Dict, Any
from urllib.parse import quote_plus
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Config:
    """Centralized configuration management"""

    # ==================== API Configuration ====================
    API_TITLE = "School Quiz API"
    API_DESCRIPTION = "Timed multiple-choice tests with AI-generated question banks"
    API_VERSION = "1.0.0"

    # ==================== Database Configuration ====================
    MONGO_USER = os.getenv("MONGO_USER", "")
    MONGO_PASS = os.getenv("MONGO_PASS", "")
    MONGO_HOST = os.getenv("MONGO_HOST", "localhost:27017")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "school_quiz")
    MONGO_AUTH_SOURCE = os.getenv("MONGO_AUTH_SOURCE", "admin")
    MONGO_URI = os.getenv("MONGO_URI", "")
    MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    @property
    def MONGO_CONNECTION_STRING(self) -> str:
        if self.MONGO_URI:
            return self.MONGO_URI
        if not self.MONGO_USER:
            return f"mongodb://{self.MONGO_HOST}/{self.MONGO_DB_NAME}"
        return (
            f"mongodb://{quote_plus(self.MONGO_USER)}:"
            f"{quote_plus(self.MONGO_PASS)}@{self.MONGO_HOST}/"
            f"{self.MONGO_DB_NAME}?authSource={self.MONGO_AUTH_SOURCE}"
        )

    # Collections
    DOCUMENT_COLLECTION = os.getenv("DOCUMENT_COLLECTION", "app_documents")

    # Document keys
    SETTINGS_KEY = "math_app_settings"
    RESULTS_KEY = "math_app_results"

    # ==================== Development Settings ====================
    USE_DUMMY_DATA = os.getenv("USE_DUMMY_DATA", "true").lower() == "true"

    # ==================== Test Configuration ====================
    SUBJECTS = [
        "Mathematics",
        "Science",
        "English",
        "History",
        "Geography",
        "Computer Science",
    ]

    DEFAULT_GRADE = "5"
    DEFAULT_SUBJECT = "Mathematics"
    DEFAULT_DURATION_MINUTES = 20

    MIN_GRADE = 1
    MAX_GRADE = 13

    # Share of correct answers shown as a pass in the results table
    PASS_THRESHOLD = float(os.getenv("PASS_THRESHOLD", "0.7"))

    # Countdown tick (seconds)
    TICK_INTERVAL_SECONDS = float(os.getenv("TICK_INTERVAL_SECONDS", "1.0"))

    # Submitted sessions are kept this long for the completion screen
    SESSION_RETENTION_SECONDS = int(os.getenv("SESSION_RETENTION_SECONDS", "3600"))

    # ==================== Question Generation Configuration ====================
    GENERATION_BATCH_SIZE = int(os.getenv("GENERATION_BATCH_SIZE", "5"))
    DEFAULT_QUESTION_COUNT = int(os.getenv("DEFAULT_QUESTION_COUNT", "20"))
    MAX_QUESTION_COUNT = int(os.getenv("MAX_QUESTION_COUNT", "100"))

    # ==================== AI Service Configuration ====================
    # Groq settings
    GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
    GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    GROQ_TIMEOUT = int(os.getenv("GROQ_TIMEOUT", "30"))
    GROQ_TEMPERATURE = float(os.getenv("GROQ_TEMPERATURE", "0.7"))
    GROQ_MAX_TOKENS = int(os.getenv("GROQ_MAX_TOKENS", "2000"))
    GROQ_TOP_P = float(os.getenv("GROQ_TOP_P", "0.9"))

    def default_settings(self) -> Dict[str, Any]:
        """Settings document used when nothing has been saved yet"""
        return {
            "grade": self.DEFAULT_GRADE,
            "subject": self.DEFAULT_SUBJECT,
            "durationMinutes": self.DEFAULT_DURATION_MINUTES,
            "questions": [],
        }

    # ==================== Validation ====================
    def validate(self) -> Dict[str, Any]:
        """Validate configuration and return status"""
        issues = []

        if self.GENERATION_BATCH_SIZE < 1:
            issues.append("GENERATION_BATCH_SIZE must be at least 1")

        if self.DEFAULT_QUESTION_COUNT < 1:
            issues.append("DEFAULT_QUESTION_COUNT must be at least 1")

        if self.MAX_QUESTION_COUNT < self.DEFAULT_QUESTION_COUNT:
            issues.append("MAX_QUESTION_COUNT must not be below DEFAULT_QUESTION_COUNT")

        if self.TICK_INTERVAL_SECONDS <= 0:
            issues.append("TICK_INTERVAL_SECONDS must be positive")

        if self.MIN_GRADE > self.MAX_GRADE:
            issues.append("MIN_GRADE must not exceed MAX_GRADE")

        if self.DEFAULT_SUBJECT not in self.SUBJECTS:
            issues.append("DEFAULT_SUBJECT must be one of SUBJECTS")

        if not self.USE_DUMMY_DATA and not self.GROQ_API_KEY:
            issues.append("GROQ_API_KEY is required when not using dummy data")

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "config_loaded": True,
            "using_dummy_data": self.USE_DUMMY_DATA
        }

# Global configuration instance
config = Config()

# Validate on import
validation_result = config.validate()
if not validation_result["valid"]:
    import logging
    logger = logging.getLogger(__name__)
    logger.warning(f"Configuration issues: {validation_result['issues']}")
