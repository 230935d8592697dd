import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.repositories.user_repo import UserRepository
from app.services.identity_service import IdentityService


async def test_resolve_creates_user_once(db):
    service = IdentityService(db)

    first = await service.resolve("Abebe")
    second = await service.resolve("Abebe")

    assert first.id == second.id
    assert await UserRepository(db).count() == 1


async def test_resolve_trims_name(db):
    service = IdentityService(db)

    user = await service.resolve("  Abebe ")

    assert user.name == "Abebe"
    assert (await service.resolve("Abebe")).id == user.id


async def test_names_are_case_sensitive(db):
    service = IdentityService(db)

    lower = await service.resolve("abebe")
    upper = await service.resolve("Abebe")

    assert lower.id != upper.id


async def test_first_match_wins_for_duplicate_names(db):
    repo = UserRepository(db)
    oldest = await repo.create_user("Sam")
    await repo.create_user("Sam")

    resolved = await IdentityService(db).resolve("Sam")

    assert resolved.id == oldest.id


@pytest.mark.parametrize("name", ["", "   "])
async def test_blank_name_rejected(db, name):
    with pytest.raises(ValidationError) as exc_info:
        await IdentityService(db).resolve(name)
    assert exc_info.value.field == "name"


async def test_get_unknown_user(db):
    import uuid

    with pytest.raises(NotFoundError) as exc_info:
        await IdentityService(db).get_user(uuid.uuid4())
    assert exc_info.value.entity == "user"
