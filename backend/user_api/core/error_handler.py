# 전역 에러 핸들러
# - 도메인 예외(UserServiceError) -> 예외에 정의된 상태 코드 + 구조화된 에러 본문
# - 요청 본문 검증 실패(RequestValidationError) -> 400 + 필드별 에러 목록
# - 그 외 처리되지 않은 예외 -> 500 (운영 환경에서는 상세 내용 숨김)

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .exceptions import UserServiceError
from ..schemas.user_schema import field_errors

logger = logging.getLogger(__name__)


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {exc.error}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"[{request.method} {request.url.path}] {exc.error}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = field_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "statusCode": status.HTTP_400_BAD_REQUEST,
            "error": "VALIDATION_ERROR",
            "description": "Invalid request body",
            "message": "; ".join(f"{f.field}: {f.message}" for f in fields),
            "fields": [f.model_dump() for f in fields],
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[{request.method} {request.url.path}] Unhandled error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "error": "UNKNOWN_ERROR",
            "description": "Unknown error",
            "message": str(exc) if settings.ENV == "dev" else "An unexpected error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
