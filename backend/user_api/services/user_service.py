# 사용자 서비스 레이어
# - 이메일 중복 체크 (수정 시에는 자기 자신 제외)
# - 비밀번호 해싱, 기존 비밀번호 검증, 새 비밀번호 길이 정책 [6, 32]
# - 응답용 공개 정보(id, name, email)만 만들어 반환 (비밀번호 해시는 절대 반환하지 않음)
# - 실패는 항상 도메인 예외로 전파합니다 (core/exceptions.py)

import logging
from typing import List, Optional

from fastapi import Depends

from ..core.exceptions import EmailAlreadyTakenError, InvalidPasswordError, UserNotFoundError
from ..core.security import get_password_hash, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user_schema import UserPublic

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 32


def to_public(user: User) -> UserPublic:
    return UserPublic(id=str(user.id), name=user.name, email=user.email)


def normalize_email(email: str) -> str:
    # 이메일 중복 판정은 대소문자를 구분하지 않습니다. 저장도 소문자로 합니다.
    return email.strip().lower()


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def get_users(self) -> List[UserPublic]:
        users = await self.repo.get_users()
        return [to_public(user) for user in users]

    async def get_user(self, user_id: str) -> UserPublic:
        user = await self.repo.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return to_public(user)

    async def is_email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        email = normalize_email(email)
        existing = await self.repo.get_user_by_email(email, exclude_id=exclude_id)
        return existing is not None

    async def create_user(self, name: str, email: str, password: str) -> UserPublic:
        email = normalize_email(email)
        # 사전 체크는 친절한 에러 메시지용. 최종 판정은 unique 인덱스가 합니다.
        if await self.is_email_taken(email):
            raise EmailAlreadyTakenError(email)

        hashed = get_password_hash(password)
        user = await self.repo.create_user(name, email, hashed)
        logger.info(f"[UserService] Created user {user.id}")
        return to_public(user)

    async def update_user(self, user_id: str, name: str, email: str) -> str:
        email = normalize_email(email)
        user = await self.repo.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if await self.is_email_taken(email, exclude_id=user_id):
            raise EmailAlreadyTakenError(email)

        if not await self.repo.update_user(user_id, name, email):
            # 체크와 수정 사이에 삭제된 경우
            raise UserNotFoundError(user_id)
        logger.info(f"[UserService] Updated user {user_id}")
        return user_id

    async def delete_user(self, user_id: str) -> str:
        user = await self.repo.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if not await self.repo.delete_user(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"[UserService] Deleted user {user_id}")
        return user_id

    async def update_password(
        self,
        user_id: str,
        old_password: str,
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> None:
        user = await self.repo.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if not verify_password(old_password, user.password):
            logger.info(f"[UserService] Old password mismatch for user {user_id}")
            raise InvalidPasswordError("Old password is incorrect")

        if not PASSWORD_MIN_LENGTH <= len(new_password) <= PASSWORD_MAX_LENGTH:
            raise InvalidPasswordError(
                f"New password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters"
            )

        if confirm_password is not None and new_password != confirm_password:
            raise InvalidPasswordError("Password confirmation does not match")

        hashed = get_password_hash(new_password)
        if not await self.repo.update_password(user_id, hashed):
            raise UserNotFoundError(user_id)
        logger.info(f"[UserService] Password changed for user {user_id}")


def get_user_service(repo: UserRepository = Depends(UserRepository)) -> UserService:
    return UserService(repo)
