"""Smallest possible tutorial: one chat completion with the stored key."""

import os
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv
from openai import OpenAI

from ai_tutorial_runner.bridge.messages import API_KEY_NAME
from ai_tutorial_runner.bridge.store import DEFAULT_ENV_PATH
from ai_tutorial_runner.core.config import TutorialConfig


def say_hello(
    env_path: Union[str, Path] = DEFAULT_ENV_PATH,
    config: Optional[TutorialConfig] = None,
    client: Optional[Any] = None,
) -> str:
    """
    Load the key from ``env_path`` and ask the model for a greeting.

    Returns:
        The model's reply text
    """
    config = config or TutorialConfig.from_env()
    load_dotenv(env_path, override=True)

    if client is None:
        client = OpenAI(api_key=os.getenv(API_KEY_NAME), max_retries=0)

    response = client.chat.completions.create(
        model=config.model,
        messages=[{"role": "user", "content": config.prompt}],
    )
    return response.choices[0].message.content or ""


def main() -> None:
    print(say_hello())


if __name__ == "__main__":
    main()
