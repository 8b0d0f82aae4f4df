"""
Environment configuration for the staff leave engine.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None
    LOG_ROTATION: str = "daily"
    LOG_RETENTION: int = 30  # days

    # Structured logging
    ENABLE_STRUCTURED_LOGGING: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of {valid_levels}')
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        if v not in ('json', 'text'):
            raise ValueError('Log format must be json or text')
        return v


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    ENVIRONMENT: str = "development"

    # JSON document with the unit's SystemSettings; defaults are used when unset
    SYSTEM_SETTINGS_FILE: Optional[str] = None

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ['development', 'staging', 'production', 'testing']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of {valid_envs}')
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
