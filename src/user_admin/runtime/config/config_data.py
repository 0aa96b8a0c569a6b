"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class ExternalSourceConfig(BaseModel):
    """Read-only external user source configuration."""

    enabled: bool = Field(default=True, description="Merge external users into listings")
    url: str = Field(
        default="https://jsonplaceholder.typicode.com/users",
        description="Endpoint returning the external user collection",
    )
    timeout_seconds: float = Field(default=5.0, description="Per-request timeout")
    retry_attempts: int = Field(
        default=3, ge=1, description="Total attempts before giving up"
    )
    retry_delay_ms: int = Field(
        default=1000, ge=0, description="Fixed delay between attempts in milliseconds"
    )
    cache_ttl_seconds: int = Field(
        default=300, ge=0, description="How long a fetched snapshot is reused (0 disables)"
    )

    @computed_field
    @property
    def retry_delay_seconds(self) -> float:
        """Fixed backoff between attempts, in seconds."""
        return self.retry_delay_ms / 1000


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="user-admin", description="Service name")
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    external_source: ExternalSourceConfig = Field(
        default_factory=ExternalSourceConfig,
        description="External user source configuration",
    )
