from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Database - Handle Render's postgres:// URL format
    DATABASE_URL: str = "sqlite:///./contracthub.db"
    RUN_MIGRATIONS: bool = False  # alembic upgrade head on startup; otherwise create_all

    APP_NAME: str = "Contract Management Platform"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # CORS - parse from environment variable (comma-separated)
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Error Tracking (Sentry)
    SENTRY_DSN: Optional[str] = None

    # Actor used when a request carries no X-User-* headers
    DEFAULT_ACTOR_ID: str = "admin_user"
    DEFAULT_ACTOR_NAME: str = "Admin"
    DEFAULT_ACTOR_ROLE: str = "admin"

    @property
    def database_url_fixed(self) -> str:
        """Fix Render's postgres:// to postgresql:// for SQLAlchemy"""
        url = self.DATABASE_URL
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    @property
    def cors_origins_list(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
