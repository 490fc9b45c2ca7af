"""Read the generated run configuration."""

import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field

from ai_tutorial_runner.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

FILE_DIRECTIVE = "file="


class RunConfig(BaseModel):
    """Script the runner was asked to execute."""

    model_config = {"frozen": True}

    file_path: str = Field(description="Tutorial script path, relative or absolute")


def read_file_path(path: Union[str, Path]) -> str:
    """
    Extract the ``file=`` directive from a config file.

    Lines are trimmed before matching and everything else in the file is
    ignored. The first non-empty directive wins.

    Raises:
        ConfigError: if the file cannot be read or has no directive
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file: {e}", path=str(path)) from e

    for line in content.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(FILE_DIRECTIVE):
            value = trimmed[len(FILE_DIRECTIVE):].strip()
            if value:
                logger.debug(f"Config {path} points at {value}")
                return value

    raise ConfigError("No file parameter found in config", path=str(path))


def read_run_config(path: Union[str, Path]) -> RunConfig:
    """Parse a config file into a :class:`RunConfig`."""
    return RunConfig(file_path=read_file_path(path))
