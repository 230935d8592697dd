from app.models.base import Base
from app.models.user import User
from app.models.quiz import Quiz
from app.models.question import Question, QuestionType
from app.models.answer import Answer
from app.models.quiz_attempt import QuizAttempt
from app.models.user_answer import UserAnswer

__all__ = [
    "Base",
    "User",
    "Quiz",
    "Question",
    "QuestionType",
    "Answer",
    "QuizAttempt",
    "UserAnswer",
]
