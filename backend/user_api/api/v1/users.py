# 사용자 라우터
# - GET    /api/v1/users                        : 인증 필요
# - GET    /api/v1/users/{id}                   : 인증 필요
# - POST   /api/v1/users                        : 회원 생성 (비밀번호 확인 포함)
# - PUT    /api/v1/users/{id}                   : 이름/이메일 수정
# - DELETE /api/v1/users/{id}                   : 삭제
# - PATCH  /api/v1/users/{id}/change-password   : 인증 필요
#
# 주의: 에러 응답은 여기서 만들지 않습니다. 서비스가 던진 도메인 예외를
# main.py의 예외 핸들러가 상태 코드로 변환합니다.

from typing import List

from fastapi import APIRouter, Depends

from ...core.exceptions import InvalidPasswordError
from ...core.security import get_current_user
from ...models.user import User
from ...schemas.user_schema import (
    Message,
    PasswordChange,
    UserCreate,
    UserCreated,
    UserId,
    UserPublic,
    UserUpdate,
)
from ...services.user_service import UserService, get_user_service

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=List[UserPublic], summary="사용자 목록 (페이지네이션 없음)")
async def get_users(
    _: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_users()

@router.get("/{user_id}", response_model=UserPublic, summary="사용자 상세")
async def get_user(
    user_id: str,
    _: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_user(user_id)

@router.post("", response_model=UserCreated, summary="회원 생성 (이메일 중복 체크 포함)")
async def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    if payload.password != payload.password_confirm:
        raise InvalidPasswordError("Password does not match")
    user = await service.create_user(payload.name, payload.email, payload.password)
    return {"message": "User created successfully", "user": user}

@router.put("/{user_id}", response_model=UserId, summary="이름/이메일 수정")
async def update_user(user_id: str, payload: UserUpdate, service: UserService = Depends(get_user_service)):
    updated_id = await service.update_user(user_id, payload.name, payload.email)
    return {"id": updated_id}

@router.delete("/{user_id}", response_model=UserId, summary="사용자 삭제 (영구 삭제)")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    deleted_id = await service.delete_user(user_id)
    return {"id": deleted_id}

@router.patch("/{user_id}/change-password", response_model=Message, summary="비밀번호 변경 (로그인 필요)")
async def change_password(
    user_id: str,
    payload: PasswordChange,
    _: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.update_password(
        user_id,
        payload.oldPassword,
        payload.newPassword,
        payload.confirmPassword,
    )
    return {"message": "Password updated successfully"}
