# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from pydantic import Field

# 프로젝트 루트 디렉토리 경로 찾기
# 주니어 개발자님께: 이 파일은 backend/user_api/core/config.py에 있으므로,
# 네 단계 위로 올라가면 프로젝트 루트가 됩니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"

class Settings(BaseSettings):
    APP_NAME: str = "user-api"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    MONGODB_URI: str = "mongodb://localhost:27017/user_api"
    # 서버 선택 타임아웃(밀리초). 이 시간 안에 연결하지 못하면 에러가 발생합니다.
    DB_CONNECT_TIMEOUT_MS: int = 5000
    # 앱 시작 시 MongoDB ping 재시도 횟수
    DB_CONNECT_ATTEMPTS: int = 3

    JWT_SECRET_KEY: str = Field(..., description="JWT 토큰 서명에 사용되는 비밀키. 반드시 강력한 랜덤 문자열로 설정하세요.")
    JWT_ALGORITHM: str = "HS256"
    # 토큰은 외부 인증 서비스가 발급합니다. OpenAPI 문서의 tokenUrl로만 사용됩니다.
    AUTH_TOKEN_URL: str = "/api/v1/auth/login"

    CORS_ALLOW_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
