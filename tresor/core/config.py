import os
from typing import Literal, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_name: str = Field(default="Tresor", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment mode"
    )

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8080, description="API server port")
    api_prefix: str = Field(default="/api", description="API prefix")

    # Single origin allowed by CORS, as served by the frontend
    cross_origin: str = Field(
        default="http://localhost:3000", description="Allowed CORS origin"
    )

    database_url: str = Field(
        default="sqlite:///./tresor.db", description="User store database URL"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log output format", validate_default=True
    )

    # Credential settings
    bcrypt_rounds: int = Field(
        default=12, ge=4, le=31, description="bcrypt cost factor (2^rounds iterations)"
    )
    credential_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Threads reserved for hashing and verification (default: CPU count)",
    )
    credential_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Upper bound for one authentication call"
    )

    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v, info: ValidationInfo):
        if info.data.get("environment") == "production":
            return "json"
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def effective_credential_workers(self) -> int:
        return self.credential_workers or os.cpu_count() or 1


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()
