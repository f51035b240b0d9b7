import re
from datetime import timedelta
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()

DEFAULT_SECRET_KEY = "your-super-secret-key-change-in-production"

_DURATION_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}
_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")


def parse_duration(value: str) -> timedelta:
    """Parse a token lifetime such as "7d", "12h", "30m" or a bare number of seconds."""
    match = _DURATION_PATTERN.match(str(value).lower())
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    seconds = int(amount) * _DURATION_UNITS[unit or "s"]
    if seconds <= 0:
        raise ValueError("Duration must be positive")
    return timedelta(seconds=seconds)


class Settings(BaseSettings):
    # Project settings
    PROJECT_NAME: str = "Task API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Database settings
    DATABASE_URL: str = "sqlite:///./data/tasks.db"
    DB_ECHO: bool = False

    # JWT settings
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "7d"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "http://localhost:3000"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def check_expires_in(cls, value: str) -> str:
        parse_duration(value)
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def access_token_expires(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are simply ignored.
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
