"""Configuration management for the tutorial runner."""

import os
import shlex
import sys
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _default_interpreter() -> List[str]:
    return [sys.executable]


def _default_install_command() -> List[str]:
    return [sys.executable, "-m", "pip", "install", "-r", "requirements.txt"]


def _command_from_env(name: str, default: List[str]) -> List[str]:
    """Split a command from the environment; an empty value disables it."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return shlex.split(raw)


class RunnerConfig(BaseModel):
    """Runner-specific configuration."""

    max_wait: float = Field(
        default=60.0,
        description="Seconds to wait for the config file"
    )
    poll_interval: float = Field(
        default=0.5,
        description="Seconds between config file checks"
    )
    interpreter: List[str] = Field(
        default_factory=_default_interpreter,
        description="Command used to execute the tutorial script"
    )
    install_command: List[str] = Field(
        default_factory=_default_install_command,
        description="One-shot dependency install command (empty to skip)"
    )
    requirements_file: str = Field(
        default="requirements.txt",
        description="Install step is skipped when this file is missing"
    )

    @classmethod
    def from_env(cls) -> "RunnerConfig":
        """Create config from environment variables."""
        return cls(
            max_wait=float(os.getenv("TUTORIAL_MAX_WAIT", "60")),
            poll_interval=float(os.getenv("TUTORIAL_POLL_INTERVAL", "0.5")),
            interpreter=_command_from_env("TUTORIAL_INTERPRETER", _default_interpreter()),
            install_command=_command_from_env("TUTORIAL_INSTALL_COMMAND", _default_install_command()),
            requirements_file=os.getenv("TUTORIAL_REQUIREMENTS_FILE", "requirements.txt"),
        )


class CredentialConfig(BaseModel):
    """Where the API key lives and how it is mirrored."""

    env_dir: str = Field(
        default="env",
        description="Directory holding the credential file"
    )
    env_file: str = Field(
        default=".env",
        description="Credential file name"
    )
    storage_key: str = Field(
        default="openai_api_key",
        description="Host localStorage key"
    )
    sync_delay: float = Field(
        default=2.0,
        description="Seconds before the listener pushes the file's key to the parent"
    )

    @property
    def env_path(self) -> Path:
        return Path(self.env_dir) / self.env_file

    @classmethod
    def from_env(cls) -> "CredentialConfig":
        """Create config from environment variables."""
        return cls(
            env_dir=os.getenv("TUTORIAL_ENV_DIR", "env"),
            env_file=os.getenv("TUTORIAL_ENV_FILE", ".env"),
            storage_key=os.getenv("TUTORIAL_STORAGE_KEY", "openai_api_key"),
            sync_delay=float(os.getenv("TUTORIAL_SYNC_DELAY", "2.0")),
        )


class TutorialConfig(BaseModel):
    """Settings for the bundled tutorial example."""

    model: str = Field(
        default="gpt-4o-mini",
        description="Model name to use"
    )
    prompt: str = Field(
        default="Say hello in 3 words.",
        description="User message sent by the example"
    )

    @classmethod
    def from_env(cls) -> "TutorialConfig":
        """Create config from environment variables."""
        return cls(
            model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            prompt=os.getenv("TUTORIAL_PROMPT", "Say hello in 3 words."),
        )


class Config(BaseModel):
    """Main configuration container."""

    runner: RunnerConfig = Field(default_factory=RunnerConfig.from_env)
    credentials: CredentialConfig = Field(default_factory=CredentialConfig.from_env)
    tutorial: TutorialConfig = Field(default_factory=TutorialConfig.from_env)

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Create complete config from environment variables."""
        return cls(
            runner=RunnerConfig.from_env(),
            credentials=CredentialConfig.from_env(),
            tutorial=TutorialConfig.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
        )
