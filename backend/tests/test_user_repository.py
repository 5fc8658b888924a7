# 저장소 레이어 테스트 (Beanie Document를 모킹, DB 의존성 없음)
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from beanie import PydanticObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from user_api.core.exceptions import EmailAlreadyTakenError, UnknownFailureError
from user_api.repositories.user_repository import UserRepository

USER_ID = "64b7f0c2a1b2c3d4e5f60718"


@patch("user_api.repositories.user_repository.User")
def test_get_user_with_malformed_id_skips_query(mock_user):
    mock_user.get = AsyncMock()
    assert asyncio.run(UserRepository().get_user("nonexistent-id")) is None
    mock_user.get.assert_not_called()


@patch("user_api.repositories.user_repository.User")
def test_get_user_missing_returns_none(mock_user):
    mock_user.get = AsyncMock(return_value=None)
    assert asyncio.run(UserRepository().get_user(USER_ID)) is None
    mock_user.get.assert_awaited_once()


@patch("user_api.repositories.user_repository.User")
def test_create_user_duplicate_key_is_email_taken(mock_user):
    mock_user.return_value.insert = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))
    with pytest.raises(EmailAlreadyTakenError):
        asyncio.run(UserRepository().create_user("Ann", "a@x.com", "hash"))


@patch("user_api.repositories.user_repository.User")
def test_create_user_store_failure_is_unknown(mock_user):
    mock_user.return_value.insert = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
    with pytest.raises(UnknownFailureError):
        asyncio.run(UserRepository().create_user("Ann", "a@x.com", "hash"))


@patch("user_api.repositories.user_repository.User")
def test_update_user_duplicate_key_is_email_taken(mock_user):
    doc = MagicMock()
    doc.set = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))
    mock_user.get = AsyncMock(return_value=doc)
    with pytest.raises(EmailAlreadyTakenError):
        asyncio.run(UserRepository().update_user(USER_ID, "Ann", "b@x.com"))


@patch("user_api.repositories.user_repository.User")
def test_writes_on_missing_user_return_false(mock_user):
    mock_user.get = AsyncMock(return_value=None)
    repo = UserRepository()
    assert asyncio.run(repo.update_user(USER_ID, "Ann", "a@x.com")) is False
    assert asyncio.run(repo.delete_user(USER_ID)) is False
    assert asyncio.run(repo.update_password(USER_ID, "hash")) is False


@patch("user_api.repositories.user_repository.User")
def test_update_password_sets_only_password(mock_user):
    doc = MagicMock()
    doc.set = AsyncMock()
    mock_user.get = AsyncMock(return_value=doc)
    assert asyncio.run(UserRepository().update_password(USER_ID, "new-hash")) is True
    doc.set.assert_awaited_once_with({mock_user.password: "new-hash"})


@patch("user_api.repositories.user_repository.NE")
@patch("user_api.repositories.user_repository.User")
def test_get_user_by_email_excludes_given_id(mock_user, mock_ne):
    mock_user.email.__eq__ = MagicMock(return_value="email-filter")
    mock_user.find_one = AsyncMock(return_value=None)
    assert asyncio.run(UserRepository().get_user_by_email("a@x.com", exclude_id=USER_ID)) is None
    mock_user.email.__eq__.assert_called_once_with("a@x.com")
    mock_ne.assert_called_once_with(mock_user.id, PydanticObjectId(USER_ID))
    mock_user.find_one.assert_awaited_once_with("email-filter", mock_ne.return_value)


@patch("user_api.repositories.user_repository.NE")
@patch("user_api.repositories.user_repository.User")
def test_get_user_by_email_without_exclusion(mock_user, mock_ne):
    existing = MagicMock()
    mock_user.email.__eq__ = MagicMock(return_value="email-filter")
    mock_user.find_one = AsyncMock(return_value=existing)
    assert asyncio.run(UserRepository().get_user_by_email("a@x.com")) is existing
    mock_ne.assert_not_called()
    mock_user.find_one.assert_awaited_once_with("email-filter")
