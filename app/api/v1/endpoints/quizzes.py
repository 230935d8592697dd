"""
Quiz Endpoints

HTTP API for quiz authoring, lookup and starting attempts.

Endpoints:
----------
- POST /quizzes                     - Create a quiz from a draft
- GET  /quizzes/code/{access_code}  - Find a quiz by access code
- GET  /quizzes/draft-template      - Blank draft to start authoring from
- GET  /quizzes/{quiz_id}           - Get quiz with questions (for taking)
- POST /quizzes/{quiz_id}/attempts  - Start an attempt
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.quiz import QuizDraft, QuizResponse, QuizDetailResponse
from app.schemas.attempt import QuizAttemptResponse
from app.services.access_code_service import AccessCodeDirectory
from app.services.quiz_draft_editor import QuizDraftEditor
from app.services.quiz_service import QuizService
from app.services.attempt_service import AttemptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Quizzes"])


def get_quiz_service(db: AsyncSession = Depends(get_db)) -> QuizService:
    return QuizService(db)


# ============================================================
# CREATE QUIZ
# ============================================================

@router.post(
    "",
    response_model=QuizResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quiz",
    description="""
    Validates the draft and stores the quiz, its questions and answers
    in one transaction. A unique access code is generated when the
    draft does not carry a custom one.
    """,
)
async def create_quiz(
    draft: QuizDraft,
    current_user: User = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service),
):
    return await service.create_quiz(creator_id=current_user.id, draft=draft)


# ============================================================
# FIND BY ACCESS CODE
# ============================================================

@router.get(
    "/code/{access_code}",
    response_model=QuizResponse,
    summary="Find a quiz by access code",
    description="Codes are case-insensitive.",
)
async def find_by_access_code(
    access_code: str,
    db: AsyncSession = Depends(get_db),
):
    return await AccessCodeDirectory(db).lookup(access_code)


# ============================================================
# DRAFT TEMPLATE
# ============================================================

@router.get(
    "/draft-template",
    response_model=QuizDraft,
    summary="Blank quiz draft",
    description="One multiple-choice question with four blank answers, the first marked correct.",
)
async def get_draft_template():
    return QuizDraftEditor().draft


# ============================================================
# GET QUIZ (for taking)
# ============================================================

@router.get(
    "/{quiz_id}",
    response_model=QuizDetailResponse,
    summary="Get quiz with questions",
    description="Returns the quiz with ordered questions and answers, without marking the correct ones.",
)
async def get_quiz(
    quiz_id: UUID,
    service: QuizService = Depends(get_quiz_service),
):
    return await service.get_quiz(quiz_id)


# ============================================================
# START ATTEMPT
# ============================================================

@router.post(
    "/{quiz_id}/attempts",
    response_model=QuizAttemptResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a quiz attempt",
)
async def start_attempt(
    quiz_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AttemptService(db).start(quiz_id=quiz_id, user_id=current_user.id)
