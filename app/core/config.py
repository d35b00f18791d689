from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"  # Ignore extra fields in .env
    )

    database_url: str = "sqlite:///./task_tracker.db"

    sendgrid_api_key: Optional[str] = None
    sendgrid_from_email: Optional[str] = None

    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30
    signin_token_expire_hours: int = 24

    debug: bool = True

    # Base URL used to build sign-in links sent by email
    public_url: str = "http://localhost:8010"
    frontend_url: Optional[List[str]] = None

settings = Settings()
