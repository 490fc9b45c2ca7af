"""Check an OpenAI API key with one lightweight authenticated request."""

import logging
from typing import Any, Callable

import openai
from openai import OpenAI

from ai_tutorial_runner.core.exceptions import (
    CredentialConnectionError,
    CredentialError,
    CredentialInvalidError,
    CredentialRateLimitedError,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]


def validate_api_key(api_key: str, client_factory: ClientFactory = OpenAI) -> None:
    """
    List models with ``api_key``. No retries.

    Raises:
        CredentialInvalidError: HTTP 401
        CredentialRateLimitedError: HTTP 429
        CredentialConnectionError: any other failure
    """
    client = client_factory(api_key=api_key.strip(), max_retries=0)
    try:
        client.models.list()
    except openai.AuthenticationError as e:
        raise CredentialInvalidError(details=e.message) from e
    except openai.RateLimitError as e:
        raise CredentialRateLimitedError(details=e.message) from e
    except openai.APIStatusError as e:
        if e.status_code == 401:
            raise CredentialInvalidError(details=e.message) from e
        if e.status_code == 429:
            raise CredentialRateLimitedError(details=e.message) from e
        raise CredentialConnectionError(reason=e.message) from e
    except openai.OpenAIError as e:
        raise CredentialConnectionError(reason=str(e) or None) from e

    logger.debug("API key accepted by OpenAI")


def is_valid_api_key(api_key: str, client_factory: ClientFactory = OpenAI) -> bool:
    """True when :func:`validate_api_key` succeeds."""
    try:
        validate_api_key(api_key, client_factory)
    except CredentialError as e:
        logger.debug(f"API key rejected: {e.message}")
        return False
    return True
