# 사용자 저장소 레이어
# - 데이터 접근(조회/생성/수정/삭제)만 담당 (서비스 로직 분리)
# - 대상 ID의 문서가 없으면 에러가 아니라 None/False를 돌려줍니다.
#   "없음"을 어떻게 해석할지는 서비스 레이어의 몫입니다.
# - unique 인덱스 위반(DuplicateKeyError)은 EmailAlreadyTakenError로 변환합니다.

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from beanie.operators import NE
from bson import ObjectId
from pydantic import EmailStr
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.exceptions import EmailAlreadyTakenError, UnknownFailureError
from ..models.user import User

logger = logging.getLogger(__name__)


def _object_id(user_id: str) -> Optional[PydanticObjectId]:
    # 형식이 잘못된 ID는 "존재하지 않는 사용자"로 취급
    if not ObjectId.is_valid(user_id):
        return None
    return PydanticObjectId(user_id)


class UserRepository:
    async def get_users(self) -> List[User]:
        return await User.find_all().to_list()

    async def get_user(self, user_id: str) -> Optional[User]:
        oid = _object_id(user_id)
        if oid is None:
            return None
        return await User.get(oid)

    async def get_user_by_email(self, email: EmailStr, exclude_id: Optional[str] = None) -> Optional[User]:
        if exclude_id is None:
            return await User.find_one(User.email == email)
        oid = _object_id(exclude_id)
        if oid is None:
            return await User.find_one(User.email == email)
        return await User.find_one(User.email == email, NE(User.id, oid))

    async def create_user(self, name: str, email: EmailStr, password_hash: str) -> User:
        user = User(name=name, email=email, password=password_hash)
        try:
            return await user.insert()
        except DuplicateKeyError as e:
            logger.warning(f"[UserRepository] Unique index rejected insert for {email}")
            raise EmailAlreadyTakenError(email) from e
        except PyMongoError as e:
            logger.error(f"[UserRepository] Insert failed: {e}", exc_info=True)
            raise UnknownFailureError("Failed to create user") from e

    async def update_user(self, user_id: str, name: str, email: EmailStr) -> bool:
        user = await self.get_user(user_id)
        if not user:
            return False
        try:
            await user.set({User.name: name, User.email: email})
        except DuplicateKeyError as e:
            logger.warning(f"[UserRepository] Unique index rejected update of {user_id} to {email}")
            raise EmailAlreadyTakenError(email) from e
        except PyMongoError as e:
            logger.error(f"[UserRepository] Update of {user_id} failed: {e}", exc_info=True)
            raise UnknownFailureError("Failed to update user") from e
        return True

    async def delete_user(self, user_id: str) -> bool:
        user = await self.get_user(user_id)
        if not user:
            return False
        try:
            await user.delete()
        except PyMongoError as e:
            logger.error(f"[UserRepository] Delete of {user_id} failed: {e}", exc_info=True)
            raise UnknownFailureError("Failed to delete user") from e
        return True

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        user = await self.get_user(user_id)
        if not user:
            return False
        try:
            await user.set({User.password: password_hash})
        except PyMongoError as e:
            logger.error(f"[UserRepository] Password update of {user_id} failed: {e}", exc_info=True)
            raise UnknownFailureError("Failed to update password") from e
        return True
