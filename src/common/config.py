import os
from typing import Annotated, List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Load environment variables from the correct .env file
app_env = os.getenv("APP_ENV", "development")
env_file = ".env" if app_env == "development" else ".env.production"
load_dotenv(env_file)  # Load the .env file

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    FRONTEND_URL: str = "http://localhost:3000"
    DATABASE_URL: str
    ALEMBIC_DATABASE_URL: str = ""
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "info"

    # Email settings (notifications are skipped when SMTP_HOST is empty)
    EMAIL_SENDER: str = "no-reply@eldercareconnect.app"
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""

    # Support comma-separated ALLOWED_ORIGINS strings
    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

settings = Settings()
