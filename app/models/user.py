from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    # Not unique: lookups take the oldest row with this name
    name = Column(String(100), nullable=False, index=True)

    # Relationships - User OWNS these
    quizzes = relationship("Quiz", back_populates="creator", cascade="all, delete-orphan")
    quiz_attempts = relationship("QuizAttempt", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name!r})>"
