"""
Quiz Repository

Data access layer for Quiz, Question and Answer models.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from app.repositories.base import BaseRepository
from app.models.quiz import Quiz
from app.models.question import Question
from app.models.answer import Answer


class QuizRepository(BaseRepository[Quiz]):
    """Repository for Quiz model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Quiz, db)

    async def get_by_access_code(self, access_code: str) -> Optional[Quiz]:
        stmt = select(self.model).where(self.model.access_code == access_code)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def access_code_exists(self, access_code: str) -> bool:
        stmt = select(func.count(self.model.id)).where(self.model.access_code == access_code)
        result = await self.db.execute(stmt)
        return (result.scalar() or 0) > 0

    async def get_by_creator(
        self,
        creator_id: UUID,
        skip: int = 0,
        limit: int = 20
    ) -> List[Quiz]:
        stmt = (
            select(self.model)
            .where(self.model.creator_id == creator_id)
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_creator(self, creator_id: UUID) -> int:
        stmt = (
            select(func.count(self.model.id))
            .where(self.model.creator_id == creator_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def get_with_questions(self, quiz_id: UUID) -> Optional[Quiz]:
        """Quiz with questions and their answers, both in order_num order."""
        stmt = (
            select(self.model)
            .options(selectinload(self.model.questions).selectinload(Question.answers))
            .where(self.model.id == quiz_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_with_questions(
        self,
        creator_id: UUID,
        title: str,
        description: Optional[str],
        access_code: str,
        questions: List[dict],
    ) -> Quiz:
        """
        Insert a quiz, its questions and their answers in one transaction.

        Args:
            questions: dicts with question_text, question_type, explanation
                and an ordered "answers" list of {answer_text, is_correct}

        Raises:
            IntegrityError: if the access code is already taken; the
                transaction is rolled back and nothing is stored
        """
        quiz = Quiz(
            creator_id=creator_id,
            title=title,
            description=description,
            access_code=access_code,
        )
        for q_pos, q_data in enumerate(questions, start=1):
            question = Question(
                question_text=q_data["question_text"],
                question_type=q_data["question_type"],
                explanation=q_data.get("explanation"),
                order_num=q_pos,
            )
            question.answers = [
                Answer(
                    answer_text=a_data["answer_text"],
                    is_correct=a_data["is_correct"],
                    order_num=a_pos,
                )
                for a_pos, a_data in enumerate(q_data["answers"], start=1)
            ]
            quiz.questions.append(question)

        self.db.add(quiz)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        return quiz


class QuestionRepository(BaseRepository[Question]):
    """Repository for Question model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Question, db)

    async def get_in_quiz(self, question_id: UUID, quiz_id: UUID) -> Optional[Question]:
        """A question only if it belongs to the given quiz."""
        stmt = select(self.model).where(
            self.model.id == question_id,
            self.model.quiz_id == quiz_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_quiz(self, quiz_id: UUID) -> int:
        stmt = select(func.count(self.model.id)).where(self.model.quiz_id == quiz_id)
        result = await self.db.execute(stmt)
        return result.scalar() or 0


class AnswerRepository(BaseRepository[Answer]):
    """Repository for Answer model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Answer, db)

    async def get_for_question(self, answer_id: UUID, question_id: UUID) -> Optional[Answer]:
        """An answer only if it is an option of the given question."""
        stmt = select(self.model).where(
            self.model.id == answer_id,
            self.model.question_id == question_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
