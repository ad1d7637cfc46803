"""Errors raised while talking to the question backend."""


class QuizDeckError(Exception):
    """Base class for client errors."""


class TransportError(QuizDeckError):
    """The backend could not be reached (connection refused, timeout, ...)."""


class ServerError(QuizDeckError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")


class ValidationError(QuizDeckError):
    """A request was rejected before it reached the backend."""
