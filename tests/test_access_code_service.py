import pytest

from app.core.config import settings
from app.core.exceptions import NotFoundError, StorageUnavailableError
from app.services import access_code_service
from app.services.access_code_service import AccessCodeDirectory, random_access_code


async def test_lookup_is_case_insensitive(db, capitals_quiz):
    code = capitals_quiz.access_code

    found = await AccessCodeDirectory(db).lookup(f"  {code.lower()} ")

    assert found.id == capitals_quiz.id


@pytest.mark.parametrize("code", ["NOPE42", "", "   "])
async def test_lookup_unknown_code_is_not_found(db, capitals_quiz, code):
    with pytest.raises(NotFoundError) as exc_info:
        await AccessCodeDirectory(db).lookup(code)
    assert exc_info.value.entity == "quiz"


def test_random_code_uses_configured_alphabet():
    code = random_access_code()

    assert len(code) == settings.ACCESS_CODE_LENGTH
    assert set(code) <= set(settings.ACCESS_CODE_ALPHABET)


async def test_generate_unique_skips_taken_codes(db, capitals_quiz, monkeypatch):
    draws = iter([capitals_quiz.access_code, "FRESH2"])
    monkeypatch.setattr(access_code_service, "random_access_code", lambda: next(draws))

    code = await AccessCodeDirectory(db).generate_unique()

    assert code == "FRESH2"


async def test_generate_unique_gives_up_after_max_retries(db, capitals_quiz, monkeypatch):
    taken = capitals_quiz.access_code
    monkeypatch.setattr(access_code_service, "random_access_code", lambda: taken)

    with pytest.raises(StorageUnavailableError):
        await AccessCodeDirectory(db).generate_unique()
