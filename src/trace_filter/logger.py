import logging
import sys
from typing import Any, Dict, Optional

from .config import LoggerConfig, get_default_config
from .formatter import PlainTextFormatter, StructuredFormatter

# Performance optimization: Cache formatter instances
_formatter_cache: Dict[str, logging.Formatter] = {}


def _get_formatter_cache_key(config: LoggerConfig) -> str:
    """Generate cache key for formatter"""
    return f"{config.formatter_type}_{config.include_timestamp}"


def _get_or_create_formatter(config: LoggerConfig) -> logging.Formatter:
    """Get formatter from cache or create new one"""
    cache_key = _get_formatter_cache_key(config)

    if cache_key not in _formatter_cache:
        if config.formatter_type == "json":
            formatter = StructuredFormatter(config)
        else:
            formatter = PlainTextFormatter(config)
        _formatter_cache[cache_key] = formatter

    return _formatter_cache[cache_key]


def _add_console_handler(logger: logging.Logger, formatter: logging.Formatter) -> None:
    # stdout carries event output, diagnostics go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


def get_logger(name: str, config: Optional[LoggerConfig] = None) -> logging.Logger:
    """Get a diagnostics logger under the ``trace_filter`` namespace"""
    if not name.startswith("trace_filter"):
        name = f"trace_filter.{name}"
    logger = logging.getLogger(name)

    if not logger.handlers:
        config = config or get_default_config()
        logger.setLevel(getattr(logging, config.log_level.upper(), logging.WARNING))
        _add_console_handler(logger, _get_or_create_formatter(config))
        logger.propagate = False

    return logger


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra: Any,
) -> None:
    """Log with context fields attached as ``ctx_`` record attributes"""
    ctx_context = {f"ctx_{k}": v for k, v in extra.items() if v is not None}
    getattr(logger, level)(message, extra=ctx_context)
