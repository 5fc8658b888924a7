# FastAPI 진입점
# - Beanie ODM 초기화 (MongoDB, 시작 시 연결 확인은 재시도)
# - 라우터 라우팅
# - CORS 설정
# - 전역 에러 핸들러 등록 (core/error_handler.py)

import logging
from datetime import datetime
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from pymongo.errors import PyMongoError

from .core.config import settings
from .core.error_handler import register_exception_handlers
from .core.retry import create_db_retry_decorator
from .models.user import User
from .api.v1.users import router as users_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# FastAPI 애플리케이션 인스턴스 생성
app = FastAPI(
    title="사용자 관리 API",
    description="사용자 조회/생성/수정/삭제 및 비밀번호 변경",
    version="1.0.0"
)

# CORS 허용 도메인 세팅
origins = [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


async def connect_db() -> AsyncIOMotorClient:
    client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=settings.DB_CONNECT_TIMEOUT_MS)

    @create_db_retry_decorator(max_attempts=settings.DB_CONNECT_ATTEMPTS)
    async def _ping():
        await client.admin.command("ping")

    await _ping()
    # init_beanie가 users 컬렉션의 email unique 인덱스를 만듭니다
    await init_beanie(database=client.get_default_database(), document_models=[User])
    return client


# Beanie 초기화 (앱 시작 시 1회)
# 주니어 개발자님께: 연결에 실패해도 서버는 시작됩니다. 헬스체크는 계속 응답하고,
# 사용자 API는 DB가 없으면 500을 돌려줍니다.
@app.on_event("startup")
async def app_init():
    try:
        await connect_db()
        logger.info(f"[MongoDB] Connected: {settings.MONGODB_URI}")
    except PyMongoError as e:
        logger.warning(f"[MongoDB] Connection failed: {e}")
        logger.info("[MongoDB] Server keeps running; user endpoints are unavailable until the database is reachable.")

# 간단한 헬스체크
@app.get("/")
async def root():
    return {"ok": True, "app": settings.APP_NAME, "time": datetime.utcnow().isoformat()}

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME, "version": "1.0.0"}

# API v1 라우터 등록
app.include_router(users_router, prefix="/api/v1")
