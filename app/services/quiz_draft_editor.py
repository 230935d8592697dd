"""
Quiz Draft Editor

In-memory editing of a QuizDraft with the authoring rules applied at
edit time, so a draft built through the editor always keeps exactly one
correct answer per question and valid answer counts.
"""

from typing import List, Optional

from app.core.exceptions import DraftEditError
from app.schemas.quiz import AnswerDraft, QuestionDraft, QuestionType, QuizDraft
from app.services.quiz_validator import MAX_ANSWERS, MIN_ANSWERS, TRUE_FALSE_TEXTS

DEFAULT_ANSWER_COUNT = 4


def multiple_choice_template() -> List[AnswerDraft]:
    """Four blank answers, the first marked correct."""
    return [
        AnswerDraft(answer_text="", is_correct=(i == 0))
        for i in range(DEFAULT_ANSWER_COUNT)
    ]


def true_false_answers() -> List[AnswerDraft]:
    return [
        AnswerDraft(answer_text=TRUE_FALSE_TEXTS[0], is_correct=True),
        AnswerDraft(answer_text=TRUE_FALSE_TEXTS[1], is_correct=False),
    ]


def blank_question() -> QuestionDraft:
    return QuestionDraft(
        question_text="",
        question_type=QuestionType.MULTIPLE_CHOICE,
        answers=multiple_choice_template(),
    )


class QuizDraftEditor:
    """
    Edits a QuizDraft in place.

    Usage:
        editor = QuizDraftEditor()
        editor.draft.title = "Capitals"
        editor.set_question_text(0, "Capital of France?")
        editor.mark_correct(0, 2)
        quiz = await quiz_service.create_quiz(user.id, editor.draft)
    """

    def __init__(self, draft: Optional[QuizDraft] = None):
        self.draft = draft if draft is not None else QuizDraft(questions=[blank_question()])

    # ============================================================
    # Questions
    # ============================================================

    def add_question(self) -> QuestionDraft:
        question = blank_question()
        self.draft.questions.append(question)
        return question

    def remove_question(self, q_index: int) -> None:
        self._question(q_index)
        if len(self.draft.questions) <= 1:
            raise DraftEditError("You need at least one question", question=q_index)
        del self.draft.questions[q_index]

    def set_question_text(self, q_index: int, text: str) -> None:
        self._question(q_index).question_text = text

    def set_question_type(self, q_index: int, question_type: QuestionType) -> None:
        """
        Change a question's type.

        Switching to true/false replaces the answers with True (correct)
        and False. Switching to multiple choice from a two-answer set
        resets to the blank four-answer template; earlier text is dropped.
        """
        question = self._question(q_index)
        question_type = QuestionType(question_type)
        question.question_type = question_type

        if question_type == QuestionType.TRUE_FALSE:
            question.answers = true_false_answers()
        elif len(question.answers) == 2:
            question.answers = multiple_choice_template()

    # ============================================================
    # Answers
    # ============================================================

    def set_answer_text(self, q_index: int, a_index: int, text: str) -> None:
        self._answer(q_index, a_index).answer_text = text

    def mark_correct(self, q_index: int, a_index: int) -> None:
        """Mark one answer correct and clear the flag on its siblings."""
        question = self._question(q_index)
        self._answer(q_index, a_index)
        for i, answer in enumerate(question.answers):
            answer.is_correct = i == a_index

    def add_answer(self, q_index: int) -> AnswerDraft:
        question = self._question(q_index)
        if question.question_type == QuestionType.TRUE_FALSE:
            raise DraftEditError(
                "True/False questions can only have two answers", question=q_index
            )
        if len(question.answers) >= MAX_ANSWERS:
            raise DraftEditError(
                f"Maximum {MAX_ANSWERS} answers per question", question=q_index
            )
        answer = AnswerDraft(answer_text="", is_correct=False)
        question.answers.append(answer)
        return answer

    def remove_answer(self, q_index: int, a_index: int) -> None:
        """Remove an answer; if it was the correct one, the first remaining answer becomes correct."""
        question = self._question(q_index)
        answer = self._answer(q_index, a_index)
        if question.question_type == QuestionType.TRUE_FALSE:
            raise DraftEditError(
                "Cannot remove answers from True/False questions", question=q_index
            )
        if len(question.answers) <= MIN_ANSWERS:
            raise DraftEditError(
                f"Questions need at least {MIN_ANSWERS} answers", question=q_index
            )

        del question.answers[a_index]
        if answer.is_correct:
            question.answers[0].is_correct = True

    # ============================================================
    # PRIVATE HELPERS
    # ============================================================

    def _question(self, q_index: int) -> QuestionDraft:
        if not 0 <= q_index < len(self.draft.questions):
            raise DraftEditError(f"No question at position {q_index + 1}", question=q_index)
        return self.draft.questions[q_index]

    def _answer(self, q_index: int, a_index: int) -> AnswerDraft:
        question = self._question(q_index)
        if not 0 <= a_index < len(question.answers):
            raise DraftEditError(
                f"No answer at position {a_index + 1} in question {q_index + 1}",
                question=q_index,
                answer=a_index,
            )
        return question.answers[a_index]
