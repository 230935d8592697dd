"""
User Endpoints

Endpoints:
----------
- POST /users              - Resolve a display name to a user
- GET  /users/me           - Current user
- GET  /users/me/quizzes   - Quizzes created by the current user
- GET  /users/me/attempts  - Current user's attempts, newest first
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.user import UserResolveRequest, UserResponse
from app.schemas.quiz import QuizListResponse, QuizResponse
from app.schemas.attempt import AttemptHistoryItem, AttemptListResponse
from app.services.identity_service import IdentityService
from app.services.quiz_service import QuizService
from app.services.attempt_service import AttemptService

router = APIRouter(tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve a display name",
    description="Returns the existing user with this exact name, or creates one.",
)
async def resolve_user(
    request: UserResolveRequest,
    db: AsyncSession = Depends(get_db),
):
    return await IdentityService(db).resolve(request.name)


@router.get("/me", response_model=UserResponse, summary="Current user")
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get(
    "/me/quizzes",
    response_model=QuizListResponse,
    summary="Quizzes created by the current user",
)
async def list_my_quizzes(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    quizzes, total = await QuizService(db).list_created(current_user.id, skip, limit)
    return QuizListResponse(
        quizzes=[QuizResponse.model_validate(q) for q in quizzes],
        total=total,
    )


@router.get(
    "/me/attempts",
    response_model=AttemptListResponse,
    summary="Current user's quiz attempts",
)
async def list_my_attempts(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    attempts, total = await AttemptService(db).list_for_user(current_user.id, skip, limit)
    return AttemptListResponse(
        attempts=[
            AttemptHistoryItem(
                id=a.id,
                quiz_id=a.quiz_id,
                user_id=a.user_id,
                score=a.score,
                max_score=a.max_score,
                completed=a.completed,
                started_at=a.started_at,
                completed_at=a.completed_at,
                quiz_title=a.quiz.title,
                access_code=a.quiz.access_code,
            )
            for a in attempts
        ],
        total=total,
    )
