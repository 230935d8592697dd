from sqlalchemy import Column, Integer, ForeignKey, Text, Enum, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel


class QuestionType(str, enum.Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"


class Question(BaseModel):
    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("quiz_id", "order_num", name="uq_questions_quiz_order"),
    )

    quiz_id = Column(Uuid(as_uuid=True), ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)

    # Question content
    question_text = Column(Text, nullable=False)
    question_type = Column(
        Enum(
            QuestionType,
            name="question_type",
            values_callable=lambda x: [e.value for e in x]
        ),
        default=QuestionType.MULTIPLE_CHOICE,
        nullable=False
    )
    explanation = Column(Text, nullable=True)  # Shown with results

    # 1-based, contiguous within a quiz
    order_num = Column(Integer, nullable=False)

    # Relationships
    quiz = relationship("Quiz", back_populates="questions")
    answers = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Answer.order_num",
    )
    user_answers = relationship("UserAnswer", back_populates="question", cascade="all, delete-orphan")

    @property
    def correct_answer(self):
        return next((a for a in self.answers if a.is_correct), None)
