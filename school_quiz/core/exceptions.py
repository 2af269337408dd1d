# school_quiz/core/exceptions.py
"""
Error kinds raised by the quiz services and mapped to HTTP responses in main.py
"""


class GenerationError(Exception):
    """Question generation failed; no partial question list is returned"""


class PersistenceError(Exception):
    """Reading or writing the document store failed"""


class ValidationError(ValueError):
    """Input rejected at the boundary (manual question entry, ids, counts)"""


class TestUnavailableError(ValueError):
    """The configured test has no questions, so nobody can start it"""

    __test__ = False


class SessionNotFoundError(Exception):
    """No active session with the given id"""


class SessionStateError(Exception):
    """Operation not allowed in the session's current state"""
