from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Support Intel API"
    DATABASE_URL: str = "sqlite:///./support_intel.db"
    LOG_LEVEL: str = "INFO"
    # Dates and the brief time are rendered in this zone (GMT+5:30).
    REPORT_TIMEZONE: str = "Asia/Kolkata"
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    class Config:
        env_file = ".env"

settings = Settings()
