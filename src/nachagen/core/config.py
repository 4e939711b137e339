"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class S3Config(BaseSettings):
    """S3 storage for rendered ACH files."""

    model_config = {"env_prefix": "NACHA_S3_"}

    bucket: str = "nacha-outbound-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    key_prefix: str = "outbound/"


class StorageConfig(BaseSettings):
    """Which file store backs the publisher."""

    model_config = {"env_prefix": "NACHA_STORAGE_"}

    backend: Literal["s3", "memory"] = "s3"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "NACHA_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    storage: StorageConfig = Field(default_factory=StorageConfig)
    s3: S3Config = Field(default_factory=S3Config)
