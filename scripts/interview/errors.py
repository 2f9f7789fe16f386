"""
Error Types for the Interview Engine
Interview outcomes, validator failures and answer-map access errors
"""

from typing import Optional


# ===================
# Interview outcomes
# ===================

class SurveyError(Exception):
    """Base class for terminal interview outcomes other than success."""


class SurveyCancelled(SurveyError):
    """The user aborted the interview; no value is produced."""

    def __init__(self, message: str = "Survey cancelled by user"):
        super().__init__(message)


class BackendError(SurveyError):
    """The presentation backend failed (I/O, closed stream, bad selection)."""


class MissingResponse(BackendError):
    """A scripted backend has no answer for the requested path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Missing response for path: {path}")


class ValidationExhausted(SurveyError):
    """A question kept failing validation past the configured retry limit."""

    def __init__(self, path: str, attempts: int, message: str):
        self.path = path
        self.attempts = attempts
        self.message = message
        super().__init__(
            f"Validation failed {attempts} times for '{path}': {message}"
        )


class ValidationError(ValueError):
    """Raised by validators to reject a value; the question is asked again."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ===================
# Answer map access
# ===================

class ResponseError(Exception):
    """Base class for failures reading collected responses."""


class MissingPath(ResponseError, KeyError):
    """No response is stored at the requested path."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Missing response for path: {path}")

    def __str__(self) -> str:
        return self.args[0]


class TypeMismatch(ResponseError, TypeError):
    """The stored response has a different kind than the one requested."""

    def __init__(self, path, expected: str, actual: str):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Type mismatch at path '{path}': expected {expected}, got {actual}"
        )


class InvalidVariant(ResponseError):
    """A stored variant index does not name any variant of the question."""

    def __init__(self, path, index: int, detail: Optional[str] = None):
        self.path = path
        self.index = index
        message = f"Invalid variant index {index} at path '{path}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
