"""Unit tests for the demo server's UserService."""

import pytest

from churchapp.application.schemas import UserRegister, UserUpdate
from churchapp.application.services import InvalidSortError, UserService
from churchapp.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from tests.fakes import FakeUserRepository


@pytest.fixture
def service() -> UserService:
    return UserService(FakeUserRepository())


@pytest.mark.asyncio
async def test_register(service: UserService):
    user = await service.register(UserRegister(username="ada", email="a@x.com"))
    assert user.id is not None
    assert user.email == "a@x.com"


@pytest.mark.asyncio
async def test_register_duplicate_email(service: UserService):
    await service.register(UserRegister(username="ada", email="a@x.com"))
    with pytest.raises(DuplicateEntityError):
        await service.register(UserRegister(username="other", email="a@x.com"))


@pytest.mark.asyncio
async def test_list_users_sorted(service: UserService):
    await service.register(UserRegister(username="zoe", email="a@x.com"))
    await service.register(UserRegister(username="ada", email="b@x.com"))

    users = await service.list_users(sort_by="username")
    assert [u.username for u in users] == ["ada", "zoe"]


@pytest.mark.asyncio
async def test_list_users_invalid_sort(service: UserService):
    with pytest.raises(InvalidSortError) as exc_info:
        await service.list_users(sort_by="password")
    assert str(exc_info.value) == "Invalid sort parameter"


@pytest.mark.asyncio
async def test_update_user(service: UserService):
    user = await service.register(UserRegister(username="ada", email="a@x.com"))
    updated = await service.update_user(user.id, UserUpdate(username="ada l"))
    assert updated.username == "ada l"
    assert updated.email == "a@x.com"


@pytest.mark.asyncio
async def test_update_user_to_taken_email(service: UserService):
    await service.register(UserRegister(username="ada", email="a@x.com"))
    other = await service.register(UserRegister(username="bob", email="b@x.com"))
    with pytest.raises(DuplicateEntityError):
        await service.update_user(other.id, UserUpdate(email="a@x.com"))


@pytest.mark.asyncio
async def test_delete_user(service: UserService):
    user = await service.register(UserRegister(username="ada", email="a@x.com"))
    assert await service.delete_user(user.id) is True
    with pytest.raises(EntityNotFoundError):
        await service.delete_user(user.id)


@pytest.mark.asyncio
async def test_register_without_username(service: UserService):
    user = await service.register(UserRegister(email="a@x.com"))
    assert user.username is None
    assert user.email == "a@x.com"
