from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )
    ENVIRONMENT: str = Field(default="dev")
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "uber_clone"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DATABASE_URL: Optional[str] = None

    JWT_SECRET_KEY: str = Field(alias="SECRET_KEY")
    JWT_ALGORITHM: str = Field(default="HS256", alias="ALGORITHM")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=24 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    BLACKLIST_TTL_SECONDS: int = 24 * 60 * 60
    BCRYPT_ROUNDS: int = 12

    AUTH_COOKIE_NAME: str = "token"
    COOKIE_DOMAIN: str = ""
    COOKIE_SAMESITE: str = "Lax"
    COOKIE_SECURE: bool = False

    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    def build_database_url(self) -> str:
        if self.DATABASE_URL and self.DATABASE_URL.strip():
            return self.DATABASE_URL.strip()
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
