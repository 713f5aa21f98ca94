"""
Core 模块 - 核心配置、日志和异常
"""
from .config import Settings, get_settings
from .exceptions import (
    ConfigError,
    IncompleteDataError,
    ParameterError,
    PaintingAgentError,
    UpstreamError,
    UpstreamErrorKind,
    ValidationError,
)
from .logging import setup_logging, get_logger, log_elapsed

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "log_elapsed",
    "PaintingAgentError",
    "ValidationError",
    "ConfigError",
    "ParameterError",
    "IncompleteDataError",
    "UpstreamError",
    "UpstreamErrorKind",
]
