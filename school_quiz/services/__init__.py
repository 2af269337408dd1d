"""
Business logic services for generation, test sessions, results and administration
"""

from .test_service import get_test_service
from .admin_service import get_admin_service

__all__ = [
    "get_test_service",
    "get_admin_service",
]
