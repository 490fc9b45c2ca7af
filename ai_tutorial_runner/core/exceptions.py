"""Custom exceptions for the tutorial runner."""

import builtins
from typing import Optional


class TutorialRunnerError(Exception):
    """Base exception for all tutorial runner errors."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        recoverable: bool = False
    ):
        self.message = message
        self.details = details
        self.recoverable = recoverable
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigError(TutorialRunnerError):
    """Configuration file is missing, unreadable or has no file= directive."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs
    ):
        self.path = path
        super().__init__(message, **kwargs)


class ConfigTimeoutError(TutorialRunnerError, builtins.TimeoutError):
    """Configuration file never appeared within the wait window."""

    def __init__(
        self,
        path: str,
        timeout: float,
        **kwargs
    ):
        self.path = path
        self.timeout = timeout
        super().__init__(
            f"Timeout waiting for {path} to be created",
            **kwargs
        )


class CredentialError(TutorialRunnerError):
    """Errors related to the OpenAI API key."""
    pass


class CredentialEmptyError(CredentialError):
    """User submitted a blank API key."""

    def __init__(self, **kwargs):
        super().__init__("API key cannot be empty", **kwargs)


class CredentialInvalidError(CredentialError):
    """Remote validation rejected the API key (HTTP 401)."""

    def __init__(
        self,
        message: str = "The API key is invalid or unauthorized.",
        status_code: Optional[int] = 401,
        **kwargs
    ):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class CredentialRateLimitedError(CredentialInvalidError):
    """Remote validation was rate limited (HTTP 429)."""

    def __init__(self, **kwargs):
        super().__init__(
            "Rate limit exceeded. Please try again later.",
            status_code=429,
            recoverable=True,
            **kwargs
        )


class CredentialConnectionError(CredentialInvalidError):
    """Remote validation failed for any other reason."""

    def __init__(self, reason: Optional[str] = None, **kwargs):
        self.reason = reason
        message = (
            f"Error: {reason}" if reason
            else "Unable to connect to OpenAI. Please check your internet connection and try again."
        )
        super().__init__(message, status_code=None, recoverable=True, **kwargs)


class UserCancelled(TutorialRunnerError):
    """User pressed Escape, Ctrl-C or q at a prompt."""

    def __init__(self, message: str = "User cancelled", **kwargs):
        super().__init__(message, recoverable=True, **kwargs)


class ExecutionFailed(TutorialRunnerError):
    """Child process exited non-zero or could not be started."""

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        reason: Optional[str] = None,
        **kwargs
    ):
        self.command = command
        self.returncode = returncode
        self.reason = reason
        if reason:
            msg = f"Command failed: {command}: {reason}"
        else:
            msg = f"Command failed with exit code {returncode}: {command}"
        super().__init__(msg, **kwargs)
