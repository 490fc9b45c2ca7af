"""The ``env/.env`` credential file."""

from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from ai_tutorial_runner.bridge.messages import API_KEY_NAME
from ai_tutorial_runner.core.config import CredentialConfig
from ai_tutorial_runner.core.exceptions import CredentialEmptyError
from ai_tutorial_runner.core.logging import get_logger, mask_key

logger = get_logger("ai_tutorial_runner.bridge")

DEFAULT_ENV_PATH = Path("env") / ".env"


class CredentialStore:
    """
    Reads and overwrites the API key line of a dotenv file.

    There is no locking: any entry point may rewrite the file at any time and
    the last write wins, so reads tolerate a missing or half-written file.
    """

    def __init__(self, env_path: Union[str, Path] = DEFAULT_ENV_PATH):
        self.env_path = Path(env_path)

    @classmethod
    def from_config(cls, config: CredentialConfig) -> "CredentialStore":
        return cls(config.env_path)

    def exists(self) -> bool:
        return self.env_path.exists()

    def read(self) -> Optional[str]:
        """Current key, or None when the file or the line is missing."""
        if not self.exists():
            return None
        try:
            values = dotenv_values(self.env_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read credential file", path=str(self.env_path), error=str(e))
            return None

        value = (values.get(API_KEY_NAME) or "").strip()
        return value or None

    def write(self, value: str) -> str:
        """
        Replace the file with a single ``OPENAI_API_KEY=<value>`` line.

        Returns:
            The trimmed value that was written

        Raises:
            CredentialEmptyError: if ``value`` is blank (nothing is written)
            OSError: if the directory or file cannot be written
        """
        trimmed = (value or "").strip()
        if not trimmed:
            raise CredentialEmptyError()

        self.env_path.parent.mkdir(parents=True, exist_ok=True)
        self.env_path.write_text(f"{API_KEY_NAME}={trimmed}\n", encoding="utf-8")
        logger.info("API key saved", path=str(self.env_path), key=mask_key(trimmed))
        return trimmed
