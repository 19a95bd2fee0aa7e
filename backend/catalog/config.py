from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./catalog.db"
    ADMIN_API_KEY: str = "change-this-admin-key"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
