"""
Configuration management system using Pydantic Settings.
Every value can be overridden through environment variables or a .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageSettings(BaseSettings):
    """Where bookmarks and preferences live on disk"""

    data_dir: str = Field(default="data", description="Application-private data directory")
    bookmarks_filename: str = Field(default="SavedPlaces")
    preferences_filename: str = Field(default="preferences.json")
    file_mode: int = Field(default=0o600, description="Permission bits applied to written files")

    model_config = {"env_prefix": "STORAGE_"}


class GeosearchSettings(BaseSettings):
    """Remote geosearch (Wikipedia) configuration"""

    base_url: str = Field(default="https://en.wikipedia.org/w/api.php")
    radius_m: int = Field(default=10000, ge=10, le=10000)
    result_limit: int = Field(default=50, ge=1, le=500)
    thumbnail_size: int = Field(default=500, ge=1)
    timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    user_agent: str = Field(default="BucketList/1.0 (nearby places lookup)")

    model_config = {"env_prefix": "GEOSEARCH_"}


class AuthSettings(BaseSettings):
    """Biometric gate configuration"""

    max_attempts: int = Field(default=3, ge=1, le=10)
    lockout_key: str = Field(default="isBlocked")
    reason: str = Field(default="Please authenticate yourself to unlock your places.")
    device_secret: Optional[str] = Field(
        default=None,
        description="Shared secret used to verify signed device assertions"
    )
    assertion_algorithm: str = Field(default="HS256")

    model_config = {"env_prefix": "AUTH_"}


class EditSessionSettings(BaseSettings):
    """Lifetime limits for open edit sessions"""

    idle_seconds: float = Field(
        default=900.0,
        ge=0,
        description="Settled sessions unused for this long are released"
    )
    max_open: int = Field(default=100, ge=1, description="Open sessions kept before the oldest is released")

    model_config = {"env_prefix": "EDIT_SESSION_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="BucketList Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    geosearch: GeosearchSettings = Field(default_factory=GeosearchSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    edit_sessions: EditSessionSettings = Field(default_factory=EditSessionSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str) and v.lower() in ("json", "text"):
            return v.lower()
        raise ValueError("log_format must be 'json' or 'text'")

    def get_data_dir(self) -> Path:
        """Get absolute path of the data directory"""
        return Path(self.storage.data_dir).resolve()

    def get_bookmarks_path(self) -> Path:
        return self.get_data_dir() / self.storage.bookmarks_filename

    def get_preferences_path(self) -> Path:
        return self.get_data_dir() / self.storage.preferences_filename

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
