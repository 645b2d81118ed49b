from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Rental Site API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # ── Database ────────────────────────────────
    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = False

    # ── Rate limiting ───────────────────────────
    REDIS_URL: Optional[str] = None
    RATE_LIMIT_ENABLED: bool = True
    # path prefix -> (max requests, window in seconds); the longest matching prefix applies
    RATE_LIMITS: Dict[str, Tuple[int, int]] = {
        "/api/v1": (100, 15 * 60),
        "/api/v1/auth/login": (5, 15 * 60),
        "/api/v1/auth/register": (3, 60 * 60),
        "/api/v1/auth/admins": (200, 15 * 60),
        "/api/v1/properties/admin": (200, 15 * 60),
        "/api/v1/contact": (5, 60 * 60),
        "/api/v1/contact/admin": (200, 15 * 60),
        "/api/v1/home/admin": (200, 15 * 60),
        "/api/v1/about/admin": (200, 15 * 60),
    }
    WHITELIST_IPS: List[str] = []

    # ── Email Configuration ─────────────────────
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_USERNAME: str = "your-email-id"
    MAIL_PASSWORD: str = "your-password"
    MAIL_ENCRYPTION: str = "tls"
    MAIL_FROM_ADDRESS: str = "example@localhost"
    MAIL_FROM_NAME: str = "Rental Site"
    MAIL_ADMIN_EMAIL: str = "example@localhost"

    EMAIL_RELAY_URL: str = ""
    EMAIL_RELAY_API_KEY: str = ""
    EMAIL_RELAY_TIMEOUT: int = 30

    COMPANY_NAME: str = "Lebbnb"

    # ── JWT / Auth ──────────────────────────────
    JWT_ACCESS_SECRET: str = "change-this-access-secret-in-production"
    JWT_REFRESH_SECRET: str = "change-this-refresh-secret-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "rental-admin"
    JWT_AUDIENCE: str = "rental-api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    BCRYPT_ROUNDS: int = 12
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCK_DURATION_MINUTES: int = 120
    ALLOW_OPEN_REGISTRATION: bool = False

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
