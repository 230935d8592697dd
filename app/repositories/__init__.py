from app.repositories.base import BaseRepository
from app.repositories.user_repo import UserRepository
from app.repositories.quiz_repo import QuizRepository, QuestionRepository, AnswerRepository
from app.repositories.attempt_repo import QuizAttemptRepository, UserAnswerRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "QuizRepository",
    "QuestionRepository",
    "AnswerRepository",
    "QuizAttemptRepository",
    "UserAnswerRepository",
]
