# User 도메인 모델 (Beanie Document)
# - 이름, 이메일, 비밀번호 해시, 생성일
# - 이메일은 unique 인덱스 (중복 이메일의 최종 판정자)

from datetime import datetime
from beanie import Document, Indexed
from pydantic import EmailStr, Field

class User(Document):
    name: str
    email: Indexed(EmailStr, unique=True)  # 중복 방지 인덱스
    password: str = Field(repr=False)  # bcrypt 해시만 저장
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"  # 컬렉션명
