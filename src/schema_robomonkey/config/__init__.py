"""Configuration management for Schema RoboMonkey."""
from .renderer import (
    DatabaseConfig,
    LoggingConfig,
    RendererConfig,
    RenderingConfig,
    load_renderer_config,
)

__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "RendererConfig",
    "RenderingConfig",
    "load_renderer_config",
]
