"""OpenAI integration - API key validation."""

from ai_tutorial_runner.llm.validation import is_valid_api_key, validate_api_key

__all__ = [
    "validate_api_key",
    "is_valid_api_key",
]
