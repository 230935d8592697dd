"""
Attempt Schemas

Pydantic models for taking a quiz and reading its results.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field


# ============================================================
# Request Schemas
# ============================================================

class AnswerSubmitRequest(BaseModel):
    """The answer chosen for one question. Omit answer_id to skip the question."""
    question_id: UUID
    answer_id: Optional[UUID] = Field(
        None,
        description="Chosen answer; null records the question as unanswered"
    )


# ============================================================
# Response Schemas
# ============================================================

class QuizAttemptResponse(BaseModel):
    """State of one attempt."""
    id: UUID
    quiz_id: UUID
    user_id: UUID
    score: int
    max_score: int
    completed: bool
    started_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AttemptHistoryItem(QuizAttemptResponse):
    """An attempt in a user's history, with the quiz it belongs to."""
    quiz_title: str
    access_code: str


class AttemptListResponse(BaseModel):
    """A user's attempts, newest first."""
    attempts: List[AttemptHistoryItem]
    total: int


class UserAnswerResponse(BaseModel):
    """A recorded answer."""
    id: UUID
    attempt_id: UUID
    question_id: UUID
    answer_id: Optional[UUID] = None
    is_correct: bool

    class Config:
        from_attributes = True


class QuestionResult(BaseModel):
    """Per-question line of a result breakdown."""
    question_id: UUID
    question_text: str
    order_num: int
    answered: bool
    user_answer: Optional[str] = None  # None when unanswered
    correct_answer: str
    is_correct: bool
    explanation: Optional[str] = None


class QuizResult(BaseModel):
    """Scored projection of a completed attempt."""
    attempt_id: UUID
    quiz_id: UUID
    quiz_title: str
    user_id: UUID
    user_name: str
    score: int
    max_score: int
    percentage: int
    completed: bool
    started_at: datetime
    completed_at: Optional[datetime] = None
    question_results: List[QuestionResult]
