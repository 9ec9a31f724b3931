# absence_api/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str = "change-me-jwt-secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 jours

    DATABASE_URL: str = "sqlite:///./absences.db"
    AUTO_CREATE_TABLES: bool = True

    # Compte administrateur initial (créé seulement si aucun compte n'existe)
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # False : /api/auth/register répond 403
    ALLOW_ADMIN_REGISTRATION: bool = True

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


# Instance unique
settings = Settings()
