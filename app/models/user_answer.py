from sqlalchemy import Column, Boolean, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class UserAnswer(BaseModel):
    __tablename__ = "user_answers"
    __table_args__ = (
        # First write wins: a second row for the same question is rejected
        UniqueConstraint("attempt_id", "question_id", name="uq_user_answers_attempt_question"),
    )

    attempt_id = Column(Uuid(as_uuid=True), ForeignKey("quiz_attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Uuid(as_uuid=True), ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    answer_id = Column(Uuid(as_uuid=True), ForeignKey("answers.id", ondelete="SET NULL"), nullable=True)

    is_correct = Column(Boolean, default=False, nullable=False)

    # Relationships
    attempt = relationship("QuizAttempt", back_populates="user_answers")
    question = relationship("Question", back_populates="user_answers")
    answer = relationship("Answer")
