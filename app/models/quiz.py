from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship
from .base import BaseModel, utcnow


class Quiz(BaseModel):
    __tablename__ = "quizzes"

    creator_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Quiz info
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Unique constraint is the directory's claim on the code
    access_code = Column(String(10), unique=True, nullable=False, index=True)

    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False
    )

    # Relationships
    creator = relationship("User", back_populates="quizzes")
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.order_num",
    )
    attempts = relationship("QuizAttempt", back_populates="quiz", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title!r}, access_code={self.access_code})>"
