"""Pydantic models for the ``config`` section of config.yaml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, model_validator
from sqlalchemy.engine import make_url


class CORSConfig(BaseModel):
    """Cross-origin settings for browser clients."""

    origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:3001"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Minimum level for every sink")
    format: Literal["json", "plain"] = Field(default="plain", description="File sink format")
    file: str | None = Field(default=None, description="Rotating log file, console only when unset")
    max_size_mb: int = Field(default=10, description="Rotate the file at this size")
    backup_count: int = Field(default=5, description="Rotated files to keep")


class DatabaseConfig(BaseModel):
    """Where books are stored.

    For server databases the password may come from a mounted secrets file
    or an environment variable instead of the URL.
    """

    url: str = Field(default="sqlite:///./inventory.db")
    pool_size: int = Field(default=20, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a connection is recycled")
    password_env_var: str | None = None
    password_file: str | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """Password from ``password_file``, then ``password_env_var``, then the URL."""
        if self.password_file:
            try:
                return Path(self.password_file).read_text().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return password

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        if self.is_sqlite:
            return self.url

        url = make_url(self.url)
        password = self.password
        if url.password and password != url.password:
            logger.warning("Database password in the URL is overridden by the configured secret")
        if password:
            url = url.set(password=password)
        # str(url) would mask the password
        return url.render_as_string(hide_password=False)


class PaginationConfig(BaseModel):
    """Defaults and limits applied to paginated listings."""

    default_page_size: int = Field(default=10, ge=1, description="Page size used when none is given")
    max_page_size: int = Field(default=100, ge=1, description="Largest page size accepted")

    @model_validator(mode="after")
    def check_default_within_max(self) -> PaginationConfig:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self


class AppConfig(BaseModel):
    environment: Literal["development", "production", "test"] = "development"
    host: str = "localhost"
    port: int = 8000
    cors: CORSConfig = Field(default_factory=CORSConfig)


class ConfigData(BaseModel):
    """Root of the configuration tree."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    app: AppConfig = Field(default_factory=AppConfig)
