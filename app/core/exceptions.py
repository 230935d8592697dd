"""
Domain Exceptions

Every error the quiz core raises derives from QuizAppError and carries
enough context (entity, field, constraint) for the caller to render a
specific message. The API layer maps each kind to an HTTP status.
"""

import asyncio
import functools
import logging
from typing import Any, Dict

from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)


class QuizAppError(Exception):
    """Base class for all quiz domain errors."""

    error_code = "quiz_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error_code, "detail": self.message, **self.context}


class ValidationError(QuizAppError):
    """Malformed authoring or identity input. User-correctable."""

    error_code = "validation_error"

    def __init__(self, message: str, field: str, **context: Any):
        super().__init__(message, field=field, **context)
        self.field = field


class NotFoundError(QuizAppError):
    """Unknown access code, quiz, question, answer, user or attempt."""

    error_code = "not_found"

    def __init__(self, message: str, entity: str, **context: Any):
        super().__init__(message, entity=entity, **context)
        self.entity = entity


class InvalidStateError(QuizAppError):
    """Operation not allowed in the attempt's current state."""

    error_code = "invalid_state"


class StorageUnavailableError(QuizAppError):
    """Backing store unreachable, timed out or erroring. Not retried here."""

    error_code = "storage_unavailable"


class DraftEditError(QuizAppError):
    """An edit on an in-memory quiz draft would break a draft rule."""

    error_code = "draft_edit_error"


def translate_storage_errors(operation: str):
    """
    Decorator for service coroutines.

    Re-raises connection-level database failures and timeouts as
    StorageUnavailableError so callers never see driver exceptions.
    Domain errors and integrity errors pass through untouched.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (OperationalError, InterfaceError, PoolTimeoutError, asyncio.TimeoutError) as e:
                logger.error(f"Storage failure during {operation}: {e}")
                raise StorageUnavailableError(
                    f"Could not {operation}: storage is unavailable",
                    operation=operation,
                ) from e
        return wrapper
    return decorator
