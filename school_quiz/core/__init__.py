"""
Core module containing configuration, persistence, AI services, and utilities
"""

from .config import config
from .database import get_document_store
from .ai_services import get_ai_service

__all__ = [
    "config",
    "get_document_store",
    "get_ai_service",
]
