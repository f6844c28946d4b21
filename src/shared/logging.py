"""
Logging Configuration - Shared Layer

This module wires structlog on top of the standard logging module so
that application events and third-party records (uvicorn, asyncio)
go through the same handlers and renderer.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from src.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that install their own handlers unless told otherwise.
_ROUTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """
    Get logging configuration from environment variables.

    Used for the bootstrap configuration, before the settings are loaded.
    """
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "format": os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        "file_path": os.environ.get("LOG_FILE_PATH"),
        "environment": os.environ.get("ENVIRONMENT"),
    }


def _resolve_environment(environment: Optional[str]) -> EnumEnvironment:
    try:
        return EnumEnvironment((environment or "development").lower())
    except ValueError:
        return EnumEnvironment.DEVELOPMENT


def _renderer_for(environment: EnumEnvironment) -> Processor:
    if environment.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """
    Configure stdlib logging and structlog.

    Call once at start-up with no arguments for an environment-driven
    bootstrap, then again through ``update_logging_from_settings``.

    Args:
        level: Optional override for the log level.
        format_string: Format used for the plain-text file handler.
        file_path: Optional override for log file path.
        environment: Application environment; production renders JSON.
    """
    env_config = _get_log_config_from_env()

    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    log_format = format_string or env_config["format"] or DEFAULT_LOG_FORMAT
    env_value = _resolve_environment(environment or env_config["environment"])

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    pre_chain: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        timestamper,
    ]

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer_for(env_value),
            ],
            foreign_pre_chain=pre_chain,
        )
    )
    handlers: List[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.KeyValueRenderer(
                        key_order=["timestamp", "level", "logger", "event"]
                    ),
                ],
                foreign_pre_chain=pre_chain,
                fmt=log_format,
            )
        )
        handlers.append(file_handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in _ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers = []
        routed.propagate = True

    structlog.get_logger(__name__).debug(
        "logging.configured",
        level=log_level,
        environment=env_value.value,
        file_path=log_file,
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: The application settings object from Pydantic.
    """
    try:
        log_level = (
            settings.logging.level.value
            if hasattr(settings.logging.level, "value")
            else settings.logging.level
        )
        environment = (
            settings.environment.value
            if hasattr(settings.environment, "value")
            else settings.environment
        )

        configure_logging(
            level=log_level,
            format_string=settings.logging.format,
            file_path=settings.logging.file_path,
            environment=environment,
        )
    except Exception as e:
        logging.error(f"Failed to update logging from settings: {e}")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
