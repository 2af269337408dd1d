# school_quiz/__init__.py
"""
School Quiz - timed multiple-choice tests with AI-generated question banks
"""

__version__ = "1.0.0"
__author__ = "School Quiz Team"
__description__ = "Teacher-configured, timed multiple-choice tests for students"

from .core.config import config
from .main import app

__all__ = ["app", "config"]
