"""
Quiz Draft Validation

Checks a submitted QuizDraft before anything is written. Checks run in a
fixed order and the first failure is raised as a ValidationError naming
the failing field, e.g. ``questions[1].answers[0].answer_text``.
"""

from typing import Optional

from app.core.exceptions import ValidationError
from app.schemas.quiz import QuizDraft, QuestionDraft, QuestionType

ACCESS_CODE_MIN_LENGTH = 4
ACCESS_CODE_MAX_LENGTH = 10
MIN_ANSWERS = 2
MAX_ANSWERS = 6
TRUE_FALSE_TEXTS = ("True", "False")


def normalize_access_code(code: str) -> str:
    """Access codes are compared and stored upper-cased."""
    return code.strip().upper()


def validate_quiz_draft(draft: QuizDraft) -> QuizDraft:
    """
    Validate a draft and return a normalized copy.

    Order of checks:
        1. title non-empty
        2. custom access code (when supplied) non-empty, 4-10 characters,
           letters and digits only
        3. per question: text, every answer text, a correct answer
        4. per question: answer count and single correct answer
           (drafts built with QuizDraftEditor always pass this step)

    Returns:
        Copy with title, texts and access code trimmed, the code upper-cased
        and true/false answers spelled exactly True and False

    Raises:
        ValidationError: on the first failing check
    """
    if not draft.title.strip():
        raise ValidationError("Quiz title is required", field="title")

    access_code = _validate_access_code(draft.access_code)

    if not draft.questions:
        raise ValidationError("A quiz needs at least one question", field="questions")

    for q_index, question in enumerate(draft.questions):
        _validate_question_content(q_index, question)

    for q_index, question in enumerate(draft.questions):
        _validate_question_shape(q_index, question)

    normalized = draft.model_copy(deep=True)
    normalized.title = draft.title.strip()
    normalized.description = (draft.description or "").strip() or None
    normalized.access_code = access_code
    for question in normalized.questions:
        question.question_text = question.question_text.strip()
        question.explanation = (question.explanation or "").strip() or None
        for answer in question.answers:
            answer.answer_text = answer.answer_text.strip()
        if question.question_type == QuestionType.TRUE_FALSE:
            for answer, text in zip(question.answers, TRUE_FALSE_TEXTS):
                answer.answer_text = text
    return normalized


def _validate_access_code(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None

    code = normalize_access_code(code)
    if not code:
        raise ValidationError(
            "Access code is required when a custom code is used",
            field="access_code",
        )
    if not ACCESS_CODE_MIN_LENGTH <= len(code) <= ACCESS_CODE_MAX_LENGTH:
        raise ValidationError(
            f"Access code must be between {ACCESS_CODE_MIN_LENGTH} and "
            f"{ACCESS_CODE_MAX_LENGTH} characters",
            field="access_code",
        )
    if not (code.isascii() and code.isalnum()):
        raise ValidationError(
            "Access code can only contain letters and digits",
            field="access_code",
        )
    return code


def _validate_question_content(q_index: int, question: QuestionDraft) -> None:
    prefix = f"questions[{q_index}]"

    if not question.question_text.strip():
        raise ValidationError(
            f"Question {q_index + 1} text is required",
            field=f"{prefix}.question_text",
        )

    for a_index, answer in enumerate(question.answers):
        if not answer.answer_text.strip():
            raise ValidationError(
                f"Answer text is required for question {q_index + 1}, answer {a_index + 1}",
                field=f"{prefix}.answers[{a_index}].answer_text",
            )

    if not any(answer.is_correct for answer in question.answers):
        raise ValidationError(
            f"Question {q_index + 1} needs at least one correct answer",
            field=f"{prefix}.answers",
        )


def _validate_question_shape(q_index: int, question: QuestionDraft) -> None:
    prefix = f"questions[{q_index}]"
    answers = question.answers

    if question.question_type == QuestionType.TRUE_FALSE:
        texts = tuple(answer.answer_text.strip().capitalize() for answer in answers)
        if texts != TRUE_FALSE_TEXTS:
            raise ValidationError(
                f"Question {q_index + 1} is true/false and must have exactly the answers True and False",
                field=f"{prefix}.answers",
            )
    elif not MIN_ANSWERS <= len(answers) <= MAX_ANSWERS:
        raise ValidationError(
            f"Question {q_index + 1} must have between {MIN_ANSWERS} and {MAX_ANSWERS} answers",
            field=f"{prefix}.answers",
        )

    if sum(1 for answer in answers if answer.is_correct) != 1:
        raise ValidationError(
            f"Question {q_index + 1} must have exactly one correct answer",
            field=f"{prefix}.answers",
        )
