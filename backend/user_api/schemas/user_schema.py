# 요청/응답 스키마 정의 (Pydantic 모델)
# - 라우터가 실행되기 전에 FastAPI가 요청 본문을 이 모델로 검증합니다
# - validate_payload: 검증 결과를 (ok, value, errors) 형태로 돌려주는 명시적 검증 함수

from typing import Any, List, Optional, Type

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, title="Name")
    email: EmailStr = Field(..., title="Email")
    password: str = Field(..., min_length=6, max_length=32, title="Password")
    password_confirm: str = Field(..., min_length=6, max_length=32, title="Password Confirm")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, title="Name")
    email: EmailStr = Field(..., title="Email")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class PasswordChange(BaseModel):
    oldPassword: str = Field(..., min_length=6, max_length=32, title="Old Password")
    newPassword: str = Field(..., min_length=6, max_length=32, title="New Password")
    confirmPassword: str = Field(..., min_length=6, max_length=32, title="Password Confirm")


class UserPublic(BaseModel):
    id: str
    name: str
    email: EmailStr


class UserCreated(BaseModel):
    message: str
    user: UserPublic


class UserId(BaseModel):
    id: str


class Message(BaseModel):
    message: str


# ---- 검증 결과 ----

class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    ok: bool
    value: Optional[Any] = None
    errors: List[FieldError] = []


def field_errors(errors: List[dict]) -> List[FieldError]:
    # pydantic 에러 목록 -> FieldError 목록. loc 맨 앞의 "body"는 떼어냅니다.
    result = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        result.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")))
    return result


def validate_payload(schema: Type[BaseModel], data: Any) -> ValidationResult:
    try:
        value = schema.model_validate(data)
    except ValidationError as e:
        return ValidationResult(ok=False, errors=field_errors(e.errors()))
    return ValidationResult(ok=True, value=value)
