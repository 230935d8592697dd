"""
Result Service

Builds the scored view of a completed attempt: score, percentage and a
per-question breakdown in question order.
"""

import logging
import math
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidStateError, NotFoundError, translate_storage_errors
from app.repositories.attempt_repo import QuizAttemptRepository
from app.repositories.quiz_repo import QuizRepository
from app.schemas.attempt import QuestionResult, QuizResult

logger = logging.getLogger(__name__)


def calculate_percentage(score: int, max_score: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when there is nothing to score."""
    if max_score <= 0:
        return 0
    return math.floor(100 * score / max_score + 0.5)


class ResultService:
    """Service for reading attempt results."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.attempt_repo = QuizAttemptRepository(db)
        self.quiz_repo = QuizRepository(db)

    @translate_storage_errors("load results")
    async def aggregate(self, attempt_id: UUID) -> QuizResult:
        """
        Result of a completed attempt.

        Questions without a recorded answer appear as unanswered and
        incorrect.

        Raises:
            NotFoundError: Unknown attempt
            InvalidStateError: Attempt not completed yet
        """
        attempt = await self.attempt_repo.get_with_details(attempt_id)
        if not attempt:
            raise NotFoundError("Attempt not found", entity="attempt", id=str(attempt_id))
        if not attempt.completed:
            raise InvalidStateError(
                "Results are available once the attempt is completed",
                attempt_id=str(attempt_id),
            )

        quiz = await self.quiz_repo.get_with_questions(attempt.quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found", entity="quiz", id=str(attempt.quiz_id))

        user_answers = {ua.question_id: ua for ua in attempt.user_answers}

        question_results = []
        for question in quiz.questions:
            answer_text = {a.id: a.answer_text for a in question.answers}
            correct = question.correct_answer
            user_answer = user_answers.get(question.id)
            chosen = (
                answer_text.get(user_answer.answer_id)
                if user_answer and user_answer.answer_id
                else None
            )

            question_results.append(
                QuestionResult(
                    question_id=question.id,
                    question_text=question.question_text,
                    order_num=question.order_num,
                    answered=chosen is not None,
                    user_answer=chosen,
                    correct_answer=correct.answer_text if correct else "",
                    is_correct=bool(user_answer and user_answer.is_correct),
                    explanation=question.explanation,
                )
            )

        return QuizResult(
            attempt_id=attempt.id,
            quiz_id=quiz.id,
            quiz_title=quiz.title,
            user_id=attempt.user_id,
            user_name=attempt.user.name,
            score=attempt.score,
            max_score=attempt.max_score,
            percentage=calculate_percentage(attempt.score, attempt.max_score),
            completed=attempt.completed,
            started_at=attempt.started_at,
            completed_at=attempt.completed_at,
            question_results=question_results,
        )
