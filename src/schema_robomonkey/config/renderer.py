"""Renderer configuration loading and validation.

Loads YAML configuration for the schema renderer, falling back to environment
variables (optionally from a .env file) when no config file is present.
"""
from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from schema_robomonkey.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config/schema-robomonkey.yaml")


class DatabaseConfig(BaseModel):
    """Database configuration."""
    dsn: str = Field(..., description="Target database URL")
    schema_name: str | None = Field(
        None, alias="schema", description="Schema to render (default: current_schema())"
    )
    pool_size: int = Field(10, ge=1, le=100, description="Connection pool size")

    model_config = {"populate_by_name": True}

    @field_validator("dsn")
    @classmethod
    def validate_dsn(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith(("postgresql://", "postgres://")):
            raise ValueError("dsn must start with 'postgresql://'")
        return v


class RenderingConfig(BaseModel):
    """Schema rendering behaviour."""
    max_concurrent_fetches: int = Field(
        8, ge=1, le=64, description="Concurrent per-object column fetches"
    )
    sort_objects: bool = Field(False, description="Sort object names before rendering")
    orphan_parameters: Literal["raise", "skip"] = Field(
        "raise", description="Policy for parameters of unlisted procedures"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", description="Log level")
    format: str = Field(
        "%(asctime)s %(levelname)s %(name)s: %(message)s", description="Log record format"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class RendererConfig(BaseModel):
    """Complete renderer configuration."""
    database: DatabaseConfig
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> RendererConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated RendererConfig instance

        Raises:
            ConfigError: If the file is missing, empty or invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ConfigError(f"Empty configuration file: {config_path}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls) -> RendererConfig:
        """Build configuration from DATABASE_URL / DATABASE_SCHEMA.

        Raises:
            ConfigError: If DATABASE_URL is not set or invalid
        """
        load_dotenv()
        dsn = os.getenv("DATABASE_URL")
        if not dsn:
            raise ConfigError("DATABASE_URL is not set and no config file was found")

        try:
            return cls.model_validate({
                "database": {"dsn": dsn, "schema": os.getenv("DATABASE_SCHEMA") or None},
                "logging": {"level": os.getenv("LOG_LEVEL", "INFO")},
            })
        except ValidationError as e:
            raise ConfigError(f"Invalid environment configuration: {e}") from e

    def log_redacted(self) -> dict:
        """Get configuration dict with the DSN password redacted for logging."""
        config_dict = self.model_dump()

        dsn = config_dict["database"]["dsn"]
        if "@" in dsn:
            creds, host = dsn.rsplit("@", 1)
            scheme, _, user_pass = creds.partition("://")
            if ":" in user_pass:
                user = user_pass.split(":", 1)[0]
                config_dict["database"]["dsn"] = f"{scheme}://{user}:***@{host}"

        return config_dict


def load_renderer_config(config_path: str | Path | None = None) -> RendererConfig:
    """Load renderer configuration from file or environment.

    Lookup order: explicit path, SCHEMA_ROBOMONKEY_CONFIG, the default config
    path, then DATABASE_URL from the environment.

    Raises:
        ConfigError: If configuration is invalid or not found
    """
    if config_path:
        return RendererConfig.from_yaml(config_path)

    env_path = os.getenv("SCHEMA_ROBOMONKEY_CONFIG")
    if env_path:
        return RendererConfig.from_yaml(env_path)

    if DEFAULT_CONFIG_PATH.exists():
        return RendererConfig.from_yaml(DEFAULT_CONFIG_PATH)

    return RendererConfig.from_env()
