# 보안/인증 유틸리티
# - 비밀번호 해싱/검증
# - JWT 액세스 토큰 검증 (보호된 라우트의 인증 의존성)
# - 토큰 발급은 외부 인증 서비스가 담당합니다 (이 서비스 범위 밖)

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
import jwt

from .config import settings
from ..models.user import User
from ..repositories.user_repository import UserRepository

# bcrypt_sha256: SHA-256으로 먼저 다이제스트한 뒤 bcrypt를 적용합니다.
# 순수 bcrypt는 72바이트 이후를 잘라내고 NUL 문자를 거부합니다.
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.AUTH_TOKEN_URL, auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    # passlib은 내부적으로 상수 시간 비교를 사용합니다
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # 해시 형식이 잘못된 경우 (UnknownHashError 포함)
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    repo: UserRepository = Depends(UserRepository),
) -> User:
    # JWT 토큰 파싱 및 사용자 조회
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        if payload.get("type") != "access":
            raise credentials_exception
        user_id = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except jwt.PyJWTError:
        raise credentials_exception

    user = await repo.get_user(user_id)
    if not user:
        raise credentials_exception

    return user
