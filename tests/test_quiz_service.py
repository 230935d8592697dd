import uuid

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.models.question import QuestionType
from app.repositories.quiz_repo import QuizRepository
from app.services import access_code_service
from app.services.quiz_service import QuizService
from tests.factories import make_draft


async def test_create_quiz_stores_ordered_questions_and_answers(db, author):
    draft = make_draft(
        title="Mixed",
        description="Two questions",
        questions=[
            ("Capital of France?", [("Paris", True), ("Lyon", False), ("Nice", False)]),
            ("The Seine flows through Paris", [("True", True), ("False", False)]),
        ],
    )

    created = await QuizService(db).create_quiz(author.id, draft)
    quiz = await QuizService(db).get_quiz(created.id)

    assert quiz.title == "Mixed"
    assert quiz.description == "Two questions"
    assert quiz.creator_id == author.id
    assert [q.order_num for q in quiz.questions] == [1, 2]
    assert [q.question_type for q in quiz.questions] == [
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.TRUE_FALSE,
    ]
    first = quiz.questions[0]
    assert [(a.order_num, a.answer_text, a.is_correct) for a in first.answers] == [
        (1, "Paris", True),
        (2, "Lyon", False),
        (3, "Nice", False),
    ]
    assert first.correct_answer.answer_text == "Paris"


async def test_generated_access_code_is_assigned(db, author):
    quiz = await QuizService(db).create_quiz(author.id, make_draft())

    assert len(quiz.access_code) == 6
    assert quiz.access_code == quiz.access_code.upper()


async def test_custom_access_code_is_upper_cased(db, author):
    quiz = await QuizService(db).create_quiz(author.id, make_draft(access_code="geo2024"))

    assert quiz.access_code == "GEO2024"


async def test_taken_custom_access_code_rejected(db, author):
    author_id = author.id
    await QuizService(db).create_quiz(author_id, make_draft(access_code="GEO2024"))

    with pytest.raises(ValidationError) as exc_info:
        await QuizService(db).create_quiz(author_id, make_draft(title="Other", access_code="geo2024"))

    assert exc_info.value.field == "access_code"
    assert await QuizRepository(db).count() == 1


async def test_concurrently_claimed_generated_code_is_retried(db, author, monkeypatch):
    author_id = author.id
    await QuizService(db).create_quiz(author_id, make_draft(access_code="RACE01"))

    # generate_unique saw RACE01 as free, as if another save claimed it in between
    codes = iter(["RACE01", "RACE02"])

    async def fake_generate_unique(self):
        return next(codes)

    monkeypatch.setattr(
        access_code_service.AccessCodeDirectory, "generate_unique", fake_generate_unique
    )

    quiz = await QuizService(db).create_quiz(author_id, make_draft(title="Second"))

    assert quiz.access_code == "RACE02"
    assert await QuizRepository(db).count() == 2


async def test_invalid_draft_stores_nothing(db, author):
    with pytest.raises(ValidationError):
        await QuizService(db).create_quiz(author.id, make_draft(title=""))

    assert await QuizRepository(db).count() == 0


async def test_unknown_creator_rejected(db):
    with pytest.raises(NotFoundError) as exc_info:
        await QuizService(db).create_quiz(uuid.uuid4(), make_draft())
    assert exc_info.value.entity == "user"


async def test_get_unknown_quiz(db):
    with pytest.raises(NotFoundError):
        await QuizService(db).get_quiz(uuid.uuid4())


async def test_list_created_newest_first(db, author, taker):
    service = QuizService(db)
    await service.create_quiz(author.id, make_draft(title="First"))
    await service.create_quiz(author.id, make_draft(title="Second"))
    await service.create_quiz(taker.id, make_draft(title="Not mine"))

    quizzes, total = await service.list_created(author.id)

    assert total == 2
    assert [q.title for q in quizzes] == ["Second", "First"]
