"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from nachagen.core.config import AppSettings, S3Config, StorageConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.log_format == "json"
    assert settings.storage.backend == "s3"


def test_s3_config_defaults():
    config = S3Config()
    assert config.bucket == "nacha-outbound-files"
    assert config.region == "us-east-1"
    assert config.endpoint_url is None
    assert config.key_prefix == "outbound/"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("NACHA_S3_BUCKET", "other-bucket")
    monkeypatch.setenv("NACHA_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("NACHA_LOG_LEVEL", "DEBUG")
    assert S3Config().bucket == "other-bucket"
    assert StorageConfig().backend == "memory"
    assert AppSettings().log_level == "DEBUG"


def test_sub_configs_read_env_when_settings_are_built(monkeypatch):
    monkeypatch.setenv("NACHA_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("NACHA_S3_KEY_PREFIX", "ach/")
    settings = AppSettings()
    assert settings.storage.backend == "memory"
    assert settings.s3.key_prefix == "ach/"
