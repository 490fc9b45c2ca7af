"""Logging configuration for the tutorial runner."""

import logging
import sys
from pathlib import Path
from typing import Optional
import structlog


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_logs: bool = False,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Set up logging configuration for the runner.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        json_logs: Whether to output JSON formatted logs
        handler: Console handler to use instead of a plain stdout stream
            (the CLI passes a rich handler here)

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="iso")
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=handler is None)
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        if not json_logs:
            handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logger = logging.getLogger("ai_tutorial_runner")
    logger.setLevel(numeric_level)

    return logger


def get_logger(name: str = "ai_tutorial_runner") -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger instance.

    Args:
        name: Logger name (usually module name)

    Returns:
        Bound logger instance
    """
    return structlog.get_logger(name)


def mask_key(value: str) -> str:
    """Short preview of a secret for log output, e.g. ``sk-proj...abcd``."""
    if len(value) <= 11:
        return "*" * len(value)
    return f"{value[:7]}...{value[-4:]}"


def log_bridge_event(event_type: str, **details):
    """
    Log host bridge traffic with consistent formatting.

    Args:
        event_type: Message type or bridge operation
        **details: Additional event details
    """
    logger = get_logger("ai_tutorial_runner.bridge")
    logger.debug(f"Bridge event: {event_type}", event_type=event_type, **details)


def log_execution(command: str, returncode: Optional[int] = None, duration_ms: Optional[int] = None):
    """
    Log a finished child process.

    Args:
        command: Command line that was run
        returncode: Exit status, None when the process never started
        duration_ms: Wall time in milliseconds
    """
    logger = get_logger("ai_tutorial_runner.runner")
    logger.info(
        "Child process finished",
        command=command,
        returncode=returncode,
        duration_ms=duration_ms
    )
