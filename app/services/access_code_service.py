"""
Access Code Directory

Maps short, shareable codes to quizzes and hands out unused codes.
Codes are case-insensitive (stored upper-cased) and live as long as
their quiz. The unique constraint on quizzes.access_code is the final
arbiter between concurrent claims; the existence check here only keeps
collisions rare.
"""

import logging
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError, StorageUnavailableError, translate_storage_errors
from app.models.quiz import Quiz
from app.repositories.quiz_repo import QuizRepository
from app.services.quiz_validator import normalize_access_code

logger = logging.getLogger(__name__)


def random_access_code() -> str:
    return "".join(
        secrets.choice(settings.ACCESS_CODE_ALPHABET)
        for _ in range(settings.ACCESS_CODE_LENGTH)
    )


class AccessCodeDirectory:
    """Lookup and generation of quiz access codes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.quiz_repo = QuizRepository(db)

    @translate_storage_errors("look up access code")
    async def lookup(self, code: str) -> Quiz:
        """
        Find the quiz for a code, ignoring case and surrounding spaces.

        Raises:
            NotFoundError: If no quiz uses this code
        """
        normalized = normalize_access_code(code)
        quiz = await self.quiz_repo.get_by_access_code(normalized) if normalized else None
        if not quiz:
            raise NotFoundError(
                "Quiz not found. Please check the access code.",
                entity="quiz",
                access_code=normalized,
            )
        return quiz

    @translate_storage_errors("generate access code")
    async def generate_unique(self) -> str:
        """
        Return a code no quiz currently uses.

        Raises:
            StorageUnavailableError: If no free code was found within
                ACCESS_CODE_MAX_RETRIES draws
        """
        for _ in range(settings.ACCESS_CODE_MAX_RETRIES):
            code = random_access_code()
            if not await self.quiz_repo.access_code_exists(code):
                return code
            logger.debug(f"Access code collision on {code}, retrying")

        logger.error(
            f"No free access code after {settings.ACCESS_CODE_MAX_RETRIES} attempts"
        )
        raise StorageUnavailableError(
            "Could not generate a unique access code",
            operation="generate access code",
        )
