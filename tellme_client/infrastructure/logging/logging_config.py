"""Logging configuration for the tellme registry client."""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_level() -> str:
    """Get log level from environment variable or default to INFO."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_dir() -> Path:
    """Get the log directory from LOG_DIR or default to ./logs."""
    return Path(os.getenv("LOG_DIR", "logs"))


def get_logging_config() -> Dict[str, Any]:
    """Build the dictConfig for client loggers.

    Client records go to stdout at LOG_LEVEL and, at DEBUG, to a rotating
    ``tellme.log`` in the log directory. httpx and httpcore only report
    warnings.
    """
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    log_level = get_log_level()
    transport_logger = {
        "level": "WARNING",
        "handlers": ["console"],
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "standard",
                "filename": str(log_dir / "tellme.log"),
                "maxBytes": 5242880,  # 5MB
                "backupCount": 3,
                "encoding": "utf8",
            },
        },
        "loggers": {
            "tellme": {
                "level": "DEBUG",
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "httpx": dict(transport_logger),
            "httpcore": dict(transport_logger),
        },
        "root": {"level": log_level, "handlers": ["console"]},
    }


def setup_logging() -> logging.Logger:
    """Set up logging configuration and return the main logger."""
    logging.config.dictConfig(get_logging_config())

    logger = logging.getLogger("tellme")
    logger.info("Logging initialized successfully")

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name under the tellme hierarchy."""
    return logging.getLogger(f"tellme.{name}")
