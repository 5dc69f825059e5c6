from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """
    Application settings
    Loaded from the .env file
    """
    # Database
    DATABASE_URL: str = "sqlite:///./hydro.db"
    SQL_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # JWT
    SECRET_KEY: str = "change-me-with-a-strong-secret-of-at-least-32-chars"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # API
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Hydro Discharges - Retributive Rate Administration"
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS (comma separated string or list)
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "http://localhost:5173,http://localhost:3000"

    @field_validator("BACKEND_CORS_ORIGINS", mode="after")
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS origins from string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
