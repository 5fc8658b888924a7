# 커스텀 예외 클래스 정의
# 주니어 개발자님께: 서비스/저장소 레이어는 HTTPException 대신 아래 도메인 예외를 던집니다.
# HTTP 상태 코드로의 변환은 main.py에 등록된 예외 핸들러 한 곳에서만 이루어집니다.

from fastapi import status


class UserServiceError(Exception):
    """사용자 서비스 관련 기본 예외 클래스

    주니어 개발자님께: 모든 사용자 관련 예외의 기본 클래스입니다.
    status_code/error/description은 응답 본문을 만들 때 그대로 사용됩니다.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "UNKNOWN_ERROR"
    description: str = "Unknown error"

    def __init__(self, message: str = None):
        self.message = message or self.description
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "error": self.error,
            "description": self.description,
            "message": self.message,
        }


class UserNotFoundError(UserServiceError):
    """요청한 ID의 사용자가 존재하지 않을 때 발생하는 예외"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error = "UNPROCESSABLE_ENTITY"
    description = "Unprocessable entity"

    def __init__(self, user_id: str = None, message: str = "Unknown user"):
        self.user_id = user_id
        super().__init__(message)


class EmailAlreadyTakenError(UserServiceError):
    """다른 사용자가 이미 사용 중인 이메일일 때 발생하는 예외

    주니어 개발자님께: 서비스 레이어의 사전 체크와 MongoDB unique 인덱스 위반
    (DuplicateKeyError) 두 경로 모두 이 예외로 변환됩니다.
    """
    status_code = status.HTTP_409_CONFLICT
    error = "EMAIL_ALREADY_TAKEN"
    description = "Email already taken"

    def __init__(self, email: str = None, message: str = "Email already taken"):
        self.email = email
        super().__init__(message)


class InvalidPasswordError(UserServiceError):
    """비밀번호 확인 불일치, 기존 비밀번호 오류, 새 비밀번호 정책 위반 시 발생하는 예외"""
    status_code = status.HTTP_403_FORBIDDEN
    error = "INVALID_PASSWORD_ERROR"
    description = "Invalid password"


class UnknownFailureError(UserServiceError):
    """그 밖의 저장소/런타임 실패"""
