from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    환경 변수(또는 .env 파일)로 덮어쓸 수 있는 애플리케이션 설정입니다.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # 데이터베이스
    DATABASE_URL: str = "sqlite:///recipes.db"

    # JWT
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 로깅
    LOG_LEVEL: str = "INFO"

    # 슬러그 충돌 시 재시도 횟수
    SLUG_MAX_ATTEMPTS: int = 5

    # 업로드 이미지 최대 크기 (1024k)
    MAX_IMAGE_SIZE_BYTES: int = 1024 * 1000

    @property
    def sqlalchemy_database_url(self) -> str:
        # 일부 호스팅 환경은 "postgres://"를 주지만 SQLAlchemy는 "postgresql://"이 필요합니다.
        if self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        return self.DATABASE_URL


@lru_cache
def get_settings() -> Settings:
    """캐시된 Settings 인스턴스를 반환합니다."""
    return Settings()
