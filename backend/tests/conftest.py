# 테스트 공용 설정
# - settings 임포트 전에 필수 환경변수를 채워 둡니다
# - MongoDB 대신 메모리 저장소를 사용합니다 (UserRepository와 같은 인터페이스)

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ.setdefault("ENV", "test")

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
import jwt
from bson import ObjectId

from user_api.core.config import settings
from user_api.core.exceptions import EmailAlreadyTakenError


class InMemoryUserRepository:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}

    async def get_users(self) -> List[SimpleNamespace]:
        return list(self.users.values())

    async def get_user(self, user_id: str) -> Optional[SimpleNamespace]:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str, exclude_id: Optional[str] = None) -> Optional[SimpleNamespace]:
        for user in self.users.values():
            if user.email == email and user.id != exclude_id:
                return user
        return None

    async def create_user(self, name: str, email: str, password_hash: str) -> SimpleNamespace:
        # unique 인덱스 흉내
        if any(u.email == email for u in self.users.values()):
            raise EmailAlreadyTakenError(email)
        user = SimpleNamespace(id=str(ObjectId()), name=name, email=email, password=password_hash)
        self.users[user.id] = user
        return user

    async def update_user(self, user_id: str, name: str, email: str) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        user.name = name
        user.email = email
        return True

    async def delete_user(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        user = self.users.get(user_id)
        if not user:
            return False
        user.password = password_hash
        return True


@pytest.fixture
def repo():
    return InMemoryUserRepository()


# ---- 테스트용 JWT 발급 ----
# 운영에서는 외부 인증 서비스가 토큰을 발급합니다. 같은 형식(HS256, sub/type)으로만 만들어 씁니다.

def create_token(subject: dict, expires_delta: timedelta) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        **subject,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def make_token():
    def _make(sub: Optional[str] = None, token_type: str = "access", minutes: int = 30) -> str:
        subject = {"type": token_type}
        if sub is not None:
            subject["sub"] = str(sub)
        return create_token(subject, timedelta(minutes=minutes))
    return _make
