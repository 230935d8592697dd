import uuid

import pytest

from app.core.exceptions import InvalidStateError, NotFoundError
from app.services.attempt_service import AttemptService
from app.services.quiz_service import QuizService
from app.services.result_service import ResultService, calculate_percentage
from tests.factories import answer_by_text, make_draft


@pytest.mark.parametrize(
    "score, max_score, expected",
    [
        (1, 1, 100),
        (0, 1, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (0, 0, 0),
    ],
)
def test_calculate_percentage(score, max_score, expected):
    assert calculate_percentage(score, max_score) == expected


@pytest.fixture
async def three_question_quiz(db, author):
    draft = make_draft(title="Europe", questions=[
        ("Capital of France?", [("Paris", True), ("Lyon", False), ("Nice", False), ("Rennes", False)]),
        ("Capital of Spain?", [("Madrid", True), ("Seville", False)]),
        ("Berlin is in Germany.", [("True", True), ("False", False)]),
    ])
    quiz = await QuizService(db).create_quiz(author.id, draft)
    return await QuizService(db).get_quiz(quiz.id)


async def test_wrong_answer_shows_correct_text(db, capitals_quiz, taker):
    question = capitals_quiz.questions[0]
    attempts = AttemptService(db)
    attempt = await attempts.start(capitals_quiz.id, taker.id)
    await attempts.submit_answer(attempt.id, question.id, answer_by_text(question, "Lyon").id)
    await attempts.complete(attempt.id)

    result = await ResultService(db).aggregate(attempt.id)

    assert (result.score, result.max_score, result.percentage) == (0, 1, 0)
    [row] = result.question_results
    assert row.answered is True
    assert row.user_answer == "Lyon"
    assert row.correct_answer == "Paris"
    assert row.is_correct is False


async def test_breakdown_follows_question_order(db, three_question_quiz, taker):
    q1, q2, q3 = three_question_quiz.questions
    attempts = AttemptService(db)
    attempt = await attempts.start(three_question_quiz.id, taker.id)
    # answered out of order, q2 left blank
    await attempts.submit_answer(attempt.id, q3.id, answer_by_text(q3, "True").id)
    await attempts.submit_answer(attempt.id, q1.id, answer_by_text(q1, "Paris").id)
    await attempts.complete(attempt.id)

    result = await ResultService(db).aggregate(attempt.id)

    assert result.quiz_title == "Europe"
    assert result.user_name == "Taker"
    assert (result.score, result.max_score, result.percentage) == (2, 3, 67)
    assert [r.order_num for r in result.question_results] == [1, 2, 3]
    assert [r.question_id for r in result.question_results] == [q1.id, q2.id, q3.id]

    unanswered = result.question_results[1]
    assert unanswered.answered is False
    assert unanswered.user_answer is None
    assert unanswered.is_correct is False
    assert unanswered.correct_answer == "Madrid"


async def test_explicitly_skipped_question_is_unanswered(db, capitals_quiz, taker):
    attempts = AttemptService(db)
    attempt = await attempts.start(capitals_quiz.id, taker.id)
    await attempts.submit_answer(attempt.id, capitals_quiz.questions[0].id, None)
    await attempts.complete(attempt.id)

    result = await ResultService(db).aggregate(attempt.id)

    [row] = result.question_results
    assert row.answered is False
    assert row.user_answer is None
    assert result.percentage == 0


async def test_result_requires_completed_attempt(db, capitals_quiz, taker):
    attempt = await AttemptService(db).start(capitals_quiz.id, taker.id)

    with pytest.raises(InvalidStateError):
        await ResultService(db).aggregate(attempt.id)


async def test_result_unknown_attempt(db):
    with pytest.raises(NotFoundError) as exc_info:
        await ResultService(db).aggregate(uuid.uuid4())
    assert exc_info.value.entity == "attempt"
