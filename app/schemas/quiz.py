"""
Quiz Schemas

Pydantic models for quiz authoring requests and quiz responses.
"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from enum import Enum

from pydantic import BaseModel, Field


# ============================================================
# Enums
# ============================================================

class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"


# ============================================================
# Authoring (draft) Schemas
# ============================================================
# Drafts are deliberately permissive: empty strings and missing
# correct answers are reported by the authoring validator with the
# exact failing position instead of a generic schema error.

class AnswerDraft(BaseModel):
    """One answer option while authoring."""
    answer_text: str = ""
    is_correct: bool = False


class QuestionDraft(BaseModel):
    """One question while authoring, answers in display order."""
    question_text: str = ""
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    explanation: Optional[str] = Field(None, max_length=2000)
    answers: List[AnswerDraft] = Field(default_factory=list)


class QuizDraft(BaseModel):
    """A full quiz definition submitted for creation."""
    title: str = Field("", max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    access_code: Optional[str] = Field(
        None,
        description="Custom access code (4-10 characters); generated when omitted"
    )
    questions: List[QuestionDraft] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Capitals",
                "description": "European capitals",
                "questions": [
                    {
                        "question_text": "Capital of France?",
                        "question_type": "multiple_choice",
                        "answers": [
                            {"answer_text": "Paris", "is_correct": True},
                            {"answer_text": "Lyon", "is_correct": False},
                            {"answer_text": "Nice", "is_correct": False},
                            {"answer_text": "Rennes", "is_correct": False},
                        ],
                    }
                ],
            }
        }


# ============================================================
# Response Schemas
# ============================================================

class AnswerResponse(BaseModel):
    """An answer option shown to a quiz taker (correctness hidden)."""
    id: UUID
    answer_text: str
    order_num: int

    class Config:
        from_attributes = True


class QuestionResponse(BaseModel):
    """A question with its options, for taking the quiz."""
    id: UUID
    quiz_id: UUID
    question_text: str
    question_type: QuestionType
    order_num: int
    answers: List[AnswerResponse]

    class Config:
        from_attributes = True


class QuizResponse(BaseModel):
    """Quiz metadata response."""
    id: UUID
    title: str
    description: Optional[str] = None
    creator_id: UUID
    access_code: str
    created_at: datetime

    class Config:
        from_attributes = True


class QuizDetailResponse(QuizResponse):
    """Quiz with ordered questions (for taking the quiz)."""
    questions: List[QuestionResponse]


class QuizListResponse(BaseModel):
    """Quizzes created by a user."""
    quizzes: List[QuizResponse]
    total: int
