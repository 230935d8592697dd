"""
Attempt Service

The attempt state machine: NotStarted -> InProgress -> Completed.

- start: creates an in-progress attempt with score = max_score = 0
- submit_answer: records one answer per question while in progress;
  correctness comes from the stored answer's is_correct flag
- complete: scores and closes the attempt exactly once

max_score is not known at start; completion fills score and max_score
(question count) in the same statement that sets completed.
"""

import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidStateError, NotFoundError, translate_storage_errors
from app.models.quiz_attempt import QuizAttempt
from app.models.user_answer import UserAnswer
from app.repositories.attempt_repo import QuizAttemptRepository, UserAnswerRepository
from app.repositories.quiz_repo import AnswerRepository, QuestionRepository, QuizRepository
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AttemptService:
    """Service for taking quizzes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.attempt_repo = QuizAttemptRepository(db)
        self.user_answer_repo = UserAnswerRepository(db)
        self.quiz_repo = QuizRepository(db)
        self.question_repo = QuestionRepository(db)
        self.answer_repo = AnswerRepository(db)
        self.user_repo = UserRepository(db)

    # ============================================================
    # START ATTEMPT
    # ============================================================

    @translate_storage_errors("start attempt")
    async def start(self, quiz_id: UUID, user_id: UUID) -> QuizAttempt:
        """
        Begin a new attempt of a quiz.

        Raises:
            NotFoundError: Unknown quiz or user
        """
        quiz = await self.quiz_repo.get_by_id(quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found", entity="quiz", id=str(quiz_id))

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", entity="user", id=str(user_id))

        attempt = await self.attempt_repo.create(
            quiz_id=quiz_id,
            user_id=user_id,
            score=0,
            max_score=0,
            completed=False,
            started_at=datetime.now(timezone.utc),
        )
        logger.info(f"Attempt {attempt.id} started: user {user_id} on quiz {quiz_id}")
        return attempt

    # ============================================================
    # SUBMIT ANSWER
    # ============================================================

    @translate_storage_errors("submit answer")
    async def submit_answer(
        self,
        attempt_id: UUID,
        question_id: UUID,
        answer_id: Optional[UUID] = None,
    ) -> UserAnswer:
        """
        Record the answer to one question.

        A missing answer_id records the question as unanswered (incorrect).
        Each question can be answered once per attempt; the first answer
        stands and later ones are rejected.

        Raises:
            NotFoundError: Unknown attempt, question not in the attempt's
                quiz, or answer not an option of the question
            InvalidStateError: Attempt completed, or question already answered
        """
        attempt = await self.attempt_repo.get_for_update(attempt_id)
        if not attempt:
            raise NotFoundError("Attempt not found", entity="attempt", id=str(attempt_id))
        if attempt.completed:
            await self.db.rollback()
            logger.warning(f"Answer submitted to completed attempt {attempt_id}")
            raise InvalidStateError(
                "This attempt is already completed",
                attempt_id=str(attempt_id),
            )

        question = await self.question_repo.get_in_quiz(question_id, attempt.quiz_id)
        if not question:
            await self.db.rollback()
            raise NotFoundError(
                "Question not found in this quiz",
                entity="question",
                id=str(question_id),
            )

        is_correct = False
        if answer_id is not None:
            answer = await self.answer_repo.get_for_question(answer_id, question_id)
            if not answer:
                await self.db.rollback()
                raise NotFoundError(
                    "Answer not found for this question",
                    entity="answer",
                    id=str(answer_id),
                )
            is_correct = answer.is_correct

        try:
            user_answer = await self.user_answer_repo.create_answer(
                attempt_id=attempt_id,
                question_id=question_id,
                answer_id=answer_id,
                is_correct=is_correct,
            )
        except IntegrityError:
            logger.warning(
                f"Duplicate answer for question {question_id} in attempt {attempt_id}"
            )
            raise InvalidStateError(
                "This question has already been answered",
                attempt_id=str(attempt_id),
                question_id=str(question_id),
            )

        logger.debug(
            f"Attempt {attempt_id}: question {question_id} answered, correct={is_correct}"
        )
        return user_answer

    # ============================================================
    # COMPLETE ATTEMPT
    # ============================================================

    @translate_storage_errors("complete attempt")
    async def complete(self, attempt_id: UUID) -> QuizAttempt:
        """
        Score and close an attempt. Valid exactly once.

        score is the number of correct recorded answers, max_score the
        number of questions in the quiz.

        Raises:
            NotFoundError: Unknown attempt
            InvalidStateError: Attempt already completed
        """
        # Lock first: the scoring UPDATE then starts after any in-flight
        # answer submission has committed and counts its row.
        attempt = await self.attempt_repo.get_for_update(attempt_id)
        if not attempt:
            raise NotFoundError("Attempt not found", entity="attempt", id=str(attempt_id))

        completed = False
        if not attempt.completed:
            completed = await self.attempt_repo.mark_completed(
                attempt_id, completed_at=datetime.now(timezone.utc)
            )
        else:
            await self.db.rollback()

        attempt = await self.attempt_repo.get_with_details(attempt_id)
        if not completed:
            logger.warning(f"Attempt {attempt_id} completed twice")
            raise InvalidStateError(
                "This attempt is already completed",
                attempt_id=str(attempt_id),
            )

        logger.info(
            f"Attempt {attempt_id} completed: {attempt.score}/{attempt.max_score}"
        )
        return attempt

    # ============================================================
    # LIST ATTEMPTS
    # ============================================================

    @translate_storage_errors("list attempts")
    async def list_for_user(
        self,
        user_id: UUID,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[List[QuizAttempt], int]:
        """A user's attempts, newest first, with their quiz loaded."""
        attempts = await self.attempt_repo.get_user_attempts(user_id, skip, limit)
        total = await self.attempt_repo.count_user_attempts(user_id)
        return attempts, total
