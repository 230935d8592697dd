import uuid

import pytest

from app.core.exceptions import InvalidStateError, NotFoundError
from app.repositories.attempt_repo import UserAnswerRepository
from app.services.attempt_service import AttemptService
from app.services.quiz_service import QuizService
from tests.factories import answer_by_text, make_draft


@pytest.fixture
def service(db):
    return AttemptService(db)


@pytest.fixture
async def two_question_quiz(db, author):
    draft = make_draft(questions=[
        ("Capital of France?", [("Paris", True), ("Lyon", False), ("Nice", False), ("Rennes", False)]),
        ("Capital of Spain?", [("Madrid", True), ("Seville", False)]),
    ])
    quiz = await QuizService(db).create_quiz(author.id, draft)
    return await QuizService(db).get_quiz(quiz.id)


async def test_start_creates_in_progress_attempt(service, capitals_quiz, taker):
    attempt = await service.start(capitals_quiz.id, taker.id)

    assert attempt.quiz_id == capitals_quiz.id
    assert attempt.user_id == taker.id
    assert attempt.completed is False
    assert attempt.score == 0
    assert attempt.max_score == 0
    assert attempt.started_at is not None
    assert attempt.completed_at is None


async def test_start_unknown_quiz(service, taker):
    with pytest.raises(NotFoundError) as exc_info:
        await service.start(uuid.uuid4(), taker.id)
    assert exc_info.value.entity == "quiz"


async def test_start_unknown_user(service, capitals_quiz):
    with pytest.raises(NotFoundError) as exc_info:
        await service.start(capitals_quiz.id, uuid.uuid4())
    assert exc_info.value.entity == "user"


class TestSubmitAnswer:
    async def test_correctness_comes_from_stored_answer(self, service, two_question_quiz, taker):
        q1, q2 = two_question_quiz.questions
        attempt = await service.start(two_question_quiz.id, taker.id)

        right = await service.submit_answer(attempt.id, q1.id, answer_by_text(q1, "Paris").id)
        wrong = await service.submit_answer(attempt.id, q2.id, answer_by_text(q2, "Seville").id)

        assert right.is_correct is True
        assert wrong.is_correct is False

    async def test_missing_answer_is_incorrect(self, service, capitals_quiz, taker):
        question = capitals_quiz.questions[0]
        attempt = await service.start(capitals_quiz.id, taker.id)

        recorded = await service.submit_answer(attempt.id, question.id, None)

        assert recorded.answer_id is None
        assert recorded.is_correct is False

    async def test_second_answer_rejected_and_first_kept(self, db, service, capitals_quiz, taker):
        question = capitals_quiz.questions[0]
        question_id = question.id
        paris_id = answer_by_text(question, "Paris").id
        lyon_id = answer_by_text(question, "Lyon").id
        attempt = await service.start(capitals_quiz.id, taker.id)
        attempt_id = attempt.id

        await service.submit_answer(attempt_id, question_id, paris_id)
        with pytest.raises(InvalidStateError):
            await service.submit_answer(attempt_id, question_id, lyon_id)

        stored = await UserAnswerRepository(db).get_for_question(attempt_id, question_id)
        assert stored.answer_id == paris_id
        assert stored.is_correct is True

    async def test_question_from_other_quiz_rejected(self, db, service, capitals_quiz, author, taker):
        other = await QuizService(db).create_quiz(author.id, make_draft(title="Other"))
        other = await QuizService(db).get_quiz(other.id)
        attempt = await service.start(capitals_quiz.id, taker.id)

        with pytest.raises(NotFoundError) as exc_info:
            await service.submit_answer(attempt.id, other.questions[0].id, None)
        assert exc_info.value.entity == "question"

    async def test_answer_from_other_question_rejected(self, service, two_question_quiz, taker):
        q1, q2 = two_question_quiz.questions
        attempt = await service.start(two_question_quiz.id, taker.id)

        with pytest.raises(NotFoundError) as exc_info:
            await service.submit_answer(attempt.id, q1.id, answer_by_text(q2, "Madrid").id)
        assert exc_info.value.entity == "answer"

    async def test_unknown_attempt(self, service, capitals_quiz):
        with pytest.raises(NotFoundError) as exc_info:
            await service.submit_answer(uuid.uuid4(), capitals_quiz.questions[0].id, None)
        assert exc_info.value.entity == "attempt"

    async def test_rejected_after_completion(self, service, capitals_quiz, taker):
        question_id = capitals_quiz.questions[0].id
        attempt = await service.start(capitals_quiz.id, taker.id)
        await service.complete(attempt.id)

        with pytest.raises(InvalidStateError):
            await service.submit_answer(attempt.id, question_id, None)


class TestComplete:
    async def test_scores_correct_answers_over_question_count(self, service, two_question_quiz, taker):
        q1, q2 = two_question_quiz.questions
        attempt = await service.start(two_question_quiz.id, taker.id)
        await service.submit_answer(attempt.id, q1.id, answer_by_text(q1, "Paris").id)
        await service.submit_answer(attempt.id, q2.id, answer_by_text(q2, "Seville").id)

        completed = await service.complete(attempt.id)

        assert completed.completed is True
        assert completed.completed_at is not None
        assert completed.score == 1
        assert completed.max_score == 2

    async def test_unanswered_questions_count_towards_max_score(self, service, two_question_quiz, taker):
        q1 = two_question_quiz.questions[0]
        attempt = await service.start(two_question_quiz.id, taker.id)
        await service.submit_answer(attempt.id, q1.id, answer_by_text(q1, "Paris").id)

        completed = await service.complete(attempt.id)

        assert (completed.score, completed.max_score) == (1, 2)

    async def test_complete_twice_rejected(self, service, capitals_quiz, taker):
        attempt = await service.start(capitals_quiz.id, taker.id)
        attempt_id = attempt.id
        first = await service.complete(attempt_id)
        first_completed_at = first.completed_at

        with pytest.raises(InvalidStateError):
            await service.complete(attempt_id)

        again = await service.attempt_repo.get_with_details(attempt_id)
        assert again.completed_at == first_completed_at

    async def test_complete_unknown_attempt(self, service):
        with pytest.raises(NotFoundError):
            await service.complete(uuid.uuid4())

    async def test_attempt_row_locked_before_scoring(self, service, capitals_quiz, taker, monkeypatch):
        calls = []
        repo = service.attempt_repo
        get_for_update = repo.get_for_update
        mark_completed = repo.mark_completed

        async def locking(attempt_id):
            calls.append("lock")
            return await get_for_update(attempt_id)

        async def scoring(attempt_id, completed_at):
            calls.append("score")
            return await mark_completed(attempt_id, completed_at)

        monkeypatch.setattr(repo, "get_for_update", locking)
        monkeypatch.setattr(repo, "mark_completed", scoring)
        attempt = await service.start(capitals_quiz.id, taker.id)

        await service.complete(attempt.id)

        assert calls == ["lock", "score"]

    async def test_completed_attempt_is_not_rescored(self, service, capitals_quiz, taker, monkeypatch):
        attempt = await service.start(capitals_quiz.id, taker.id)
        attempt_id = attempt.id
        await service.complete(attempt_id)

        async def fail(*args, **kwargs):
            raise AssertionError("completed attempt scored again")

        monkeypatch.setattr(service.attempt_repo, "mark_completed", fail)
        with pytest.raises(InvalidStateError):
            await service.complete(attempt_id)


async def test_list_for_user_newest_first(db, service, capitals_quiz, author, taker):
    other = await QuizService(db).create_quiz(author.id, make_draft(title="Later"))
    first = await service.start(capitals_quiz.id, taker.id)
    second = await service.start(other.id, taker.id)
    await service.start(capitals_quiz.id, author.id)

    attempts, total = await service.list_for_user(taker.id)

    assert total == 2
    assert [a.id for a in attempts] == [second.id, first.id]
    assert attempts[0].quiz.title == "Later"
