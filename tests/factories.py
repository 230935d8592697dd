from app.schemas.quiz import AnswerDraft, QuestionDraft, QuestionType, QuizDraft

CAPITAL_OF_FRANCE = (
    "Capital of France?",
    [("Paris", True), ("Lyon", False), ("Nice", False), ("Rennes", False)],
)


def make_draft(title="Capitals", questions=None, access_code=None, description=None):
    """Draft with the single "Capital of France?" question unless questions are given."""
    if questions is None:
        questions = [CAPITAL_OF_FRANCE]
    return QuizDraft(
        title=title,
        description=description,
        access_code=access_code,
        questions=[
            QuestionDraft(
                question_text=text,
                question_type=(
                    QuestionType.TRUE_FALSE
                    if [a for a, _ in answers] == ["True", "False"]
                    else QuestionType.MULTIPLE_CHOICE
                ),
                answers=[AnswerDraft(answer_text=a, is_correct=c) for a, c in answers],
            )
            for text, answers in questions
        ],
    )


def answer_by_text(question, text):
    return next(a for a in question.answers if a.answer_text == text)
