"""
Attempt Endpoints

HTTP API for answering, completing and reviewing an attempt.

Endpoints:
----------
- POST /attempts/{attempt_id}/answers   - Submit the answer to one question
- POST /attempts/{attempt_id}/complete  - Complete and score the attempt
- GET  /attempts/{attempt_id}/result    - Scored result with breakdown
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.attempt import (
    AnswerSubmitRequest,
    QuizAttemptResponse,
    QuizResult,
    UserAnswerResponse,
)
from app.services.attempt_service import AttemptService
from app.services.result_service import ResultService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Attempts"])


def get_attempt_service(db: AsyncSession = Depends(get_db)) -> AttemptService:
    return AttemptService(db)


@router.post(
    "/{attempt_id}/answers",
    response_model=UserAnswerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an answer",
    description="""
    Records the answer to one question. Each question can be answered
    once per attempt; a second submission returns 409 and the first
    answer stands. Omit answer_id to skip the question.
    """,
)
async def submit_answer(
    attempt_id: UUID,
    submission: AnswerSubmitRequest,
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.submit_answer(
        attempt_id=attempt_id,
        question_id=submission.question_id,
        answer_id=submission.answer_id,
    )


@router.post(
    "/{attempt_id}/complete",
    response_model=QuizAttemptResponse,
    summary="Complete an attempt",
    description="Scores the attempt. Completing twice returns 409.",
)
async def complete_attempt(
    attempt_id: UUID,
    service: AttemptService = Depends(get_attempt_service),
):
    return await service.complete(attempt_id)


@router.get(
    "/{attempt_id}/result",
    response_model=QuizResult,
    summary="Get attempt result",
    description="Score, percentage and per-question breakdown of a completed attempt.",
)
async def get_result(
    attempt_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await ResultService(db).aggregate(attempt_id)
