"""Core components - configuration, logging, and exceptions."""

from ai_tutorial_runner.core.config import Config
from ai_tutorial_runner.core.exceptions import (
    TutorialRunnerError,
    ConfigError,
    ConfigTimeoutError,
    CredentialError,
    UserCancelled,
    ExecutionFailed,
)
from ai_tutorial_runner.core.logging import setup_logging, get_logger

__all__ = [
    "Config",
    "TutorialRunnerError",
    "ConfigError",
    "ConfigTimeoutError",
    "CredentialError",
    "UserCancelled",
    "ExecutionFailed",
    "setup_logging",
    "get_logger",
]
