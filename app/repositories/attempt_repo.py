"""
Attempt Repository

Data access layer for QuizAttempt and UserAnswer models.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from app.repositories.base import BaseRepository
from app.models.question import Question
from app.models.quiz_attempt import QuizAttempt
from app.models.user_answer import UserAnswer


class QuizAttemptRepository(BaseRepository[QuizAttempt]):
    """Repository for QuizAttempt model."""

    def __init__(self, db: AsyncSession):
        super().__init__(QuizAttempt, db)

    async def get_for_update(self, attempt_id: UUID) -> Optional[QuizAttempt]:
        """
        Load an attempt and lock its row until the transaction ends.

        Serialises answer submission against completion on backends that
        support row locks (SQLite ignores FOR UPDATE and serialises writes
        itself).
        """
        stmt = (
            select(self.model)
            .where(self.model.id == attempt_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_details(self, attempt_id: UUID) -> Optional[QuizAttempt]:
        """Attempt with its user and recorded answers."""
        stmt = (
            select(self.model)
            .options(
                selectinload(self.model.user),
                selectinload(self.model.user_answers),
            )
            .where(self.model.id == attempt_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_attempts(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 20
    ) -> List[QuizAttempt]:
        stmt = (
            select(self.model)
            .options(selectinload(self.model.quiz))
            .where(self.model.user_id == user_id)
            .order_by(self.model.started_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_user_attempts(self, user_id: UUID) -> int:
        stmt = (
            select(func.count(self.model.id))
            .where(self.model.user_id == user_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def mark_completed(self, attempt_id: UUID, completed_at: datetime) -> bool:
        """
        Score and close an attempt in a single conditional UPDATE.

        score and max_score are computed by correlated subqueries in the
        same statement that flips completed, so no reader ever sees a
        completed attempt without its score.

        Returns:
            True if this call completed the attempt, False if it was
            already completed (or does not exist)
        """
        score_subq = (
            select(func.count(UserAnswer.id))
            .where(
                UserAnswer.attempt_id == QuizAttempt.id,
                UserAnswer.is_correct.is_(True),
            )
            .scalar_subquery()
        )
        max_score_subq = (
            select(func.count(Question.id))
            .where(Question.quiz_id == QuizAttempt.quiz_id)
            .scalar_subquery()
        )
        stmt = (
            update(QuizAttempt)
            .where(
                QuizAttempt.id == attempt_id,
                QuizAttempt.completed.is_(False),
            )
            .values(
                score=score_subq,
                max_score=max_score_subq,
                completed=True,
                completed_at=completed_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount == 1


class UserAnswerRepository(BaseRepository[UserAnswer]):
    """Repository for UserAnswer model."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserAnswer, db)

    async def create_answer(
        self,
        attempt_id: UUID,
        question_id: UUID,
        answer_id: Optional[UUID],
        is_correct: bool,
    ) -> UserAnswer:
        """
        Insert one answer row.

        Raises:
            IntegrityError: if this question already has an answer in the
                attempt; the transaction is rolled back
        """
        instance = UserAnswer(
            attempt_id=attempt_id,
            question_id=question_id,
            answer_id=answer_id,
            is_correct=is_correct,
        )
        self.db.add(instance)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(instance)
        return instance

    async def get_for_question(self, attempt_id: UUID, question_id: UUID) -> Optional[UserAnswer]:
        stmt = select(self.model).where(
            self.model.attempt_id == attempt_id,
            self.model.question_id == question_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
