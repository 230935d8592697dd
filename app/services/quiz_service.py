"""
Quiz Service

Business logic for quiz authoring and retrieval:
- Validating and storing a quiz with its ordered questions and answers
- Assigning a custom or generated access code
- Fetching a quiz for taking, and listing a creator's quizzes
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
    translate_storage_errors,
)
from app.models.question import QuestionType as QuestionTypeModel
from app.models.quiz import Quiz
from app.repositories.quiz_repo import QuizRepository
from app.repositories.user_repo import UserRepository
from app.schemas.quiz import QuizDraft
from app.services.access_code_service import AccessCodeDirectory
from app.services.quiz_validator import validate_quiz_draft

logger = logging.getLogger(__name__)


class QuizService:
    """Service for creating and reading quizzes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.quiz_repo = QuizRepository(db)
        self.user_repo = UserRepository(db)
        self.directory = AccessCodeDirectory(db)

    # ============================================================
    # CREATE QUIZ
    # ============================================================

    @translate_storage_errors("create quiz")
    async def create_quiz(self, creator_id: UUID, draft: QuizDraft) -> Quiz:
        """
        Validate a draft and store it atomically.

        Questions get order_num 1..n in draft order, answers likewise per
        question. Without a custom code a unique one is generated; if a
        concurrent save claims the same generated code the whole insert
        is retried with a fresh code.

        Raises:
            ValidationError: Draft invalid, or custom code already taken
            NotFoundError: Creator does not exist
        """
        draft = validate_quiz_draft(draft)

        creator = await self.user_repo.get_by_id(creator_id)
        if not creator:
            raise NotFoundError("User not found", entity="user", id=str(creator_id))

        questions = [
            {
                "question_text": q.question_text,
                "question_type": QuestionTypeModel(q.question_type.value),
                "explanation": q.explanation,
                "answers": [
                    {"answer_text": a.answer_text, "is_correct": a.is_correct}
                    for a in q.answers
                ],
            }
            for q in draft.questions
        ]

        if draft.access_code:
            quiz = await self._insert(creator_id, draft, questions, draft.access_code)
            if quiz is None:
                logger.warning(f"Custom access code {draft.access_code} already taken")
                raise ValidationError(
                    "This access code is already in use",
                    field="access_code",
                    access_code=draft.access_code,
                )
        else:
            quiz = None
            for _ in range(settings.ACCESS_CODE_MAX_RETRIES):
                code = await self.directory.generate_unique()
                quiz = await self._insert(creator_id, draft, questions, code)
                if quiz is not None:
                    break
                logger.info(f"Generated access code {code} was claimed concurrently, retrying")
            if quiz is None:
                raise StorageUnavailableError(
                    "Could not claim a unique access code",
                    operation="create quiz",
                )

        logger.info(
            f"Quiz {quiz.id} created by {creator_id} with {len(questions)} questions, "
            f"access code {quiz.access_code}"
        )
        return quiz

    # ============================================================
    # GET QUIZ (for taking)
    # ============================================================

    @translate_storage_errors("load quiz")
    async def get_quiz(self, quiz_id: UUID) -> Quiz:
        """Quiz with questions and answers in order."""
        quiz = await self.quiz_repo.get_with_questions(quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found", entity="quiz", id=str(quiz_id))
        return quiz

    # ============================================================
    # LIST CREATED QUIZZES
    # ============================================================

    @translate_storage_errors("list quizzes")
    async def list_created(
        self,
        creator_id: UUID,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[List[Quiz], int]:
        quizzes = await self.quiz_repo.get_by_creator(creator_id, skip, limit)
        total = await self.quiz_repo.count_by_creator(creator_id)
        return quizzes, total

    # ============================================================
    # PRIVATE HELPERS
    # ============================================================

    async def _insert(
        self,
        creator_id: UUID,
        draft: QuizDraft,
        questions: List[dict],
        access_code: str,
    ) -> Optional[Quiz]:
        """Insert the quiz; None if the access code was taken."""
        try:
            return await self.quiz_repo.create_with_questions(
                creator_id=creator_id,
                title=draft.title,
                description=draft.description,
                access_code=access_code,
                questions=questions,
            )
        except IntegrityError:
            if await self.quiz_repo.access_code_exists(access_code):
                return None
            raise
