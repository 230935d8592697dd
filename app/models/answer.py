from sqlalchemy import Column, Integer, Boolean, ForeignKey, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import BaseModel


class Answer(BaseModel):
    __tablename__ = "answers"
    __table_args__ = (
        UniqueConstraint("question_id", "order_num", name="uq_answers_question_order"),
    )

    question_id = Column(Uuid(as_uuid=True), ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)

    answer_text = Column(Text, nullable=False)
    is_correct = Column(Boolean, default=False, nullable=False)
    order_num = Column(Integer, nullable=False)

    # Relationships
    question = relationship("Question", back_populates="answers")
