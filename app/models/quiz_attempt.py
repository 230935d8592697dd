from sqlalchemy import Column, Integer, Boolean, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from .base import BaseModel, utcnow


class QuizAttempt(BaseModel):
    __tablename__ = "quiz_attempts"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)

    # Results stay at zero until completion fills both in one statement
    score = Column(Integer, default=0, nullable=False)
    max_score = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False, index=True)

    # Timing
    started_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="quiz_attempts")
    quiz = relationship("Quiz", back_populates="attempts")
    user_answers = relationship("UserAnswer", back_populates="attempt", cascade="all, delete-orphan")

    def __repr__(self):
        return (
            f"<QuizAttempt(id={self.id}, quiz_id={self.quiz_id}, "
            f"score={self.score}/{self.max_score}, completed={self.completed})>"
        )
