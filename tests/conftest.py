import io
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx
import openai
import pytest
from rich.console import Console

from ai_tutorial_runner.bridge.host import HostBridge
from ai_tutorial_runner.bridge.messages import BridgeMessage
from ai_tutorial_runner.bridge.store import CredentialStore


class FakeHostBridge(HostBridge):
    """In-memory browser host: a storage dict, a parent outbox, listeners."""

    def __init__(
        self,
        storage: Optional[Dict[str, str]] = None,
        parent: bool = True,
        storage_available: bool = True,
    ) -> None:
        self.storage = dict(storage or {})
        self.parent = parent
        self.storage_available = storage_available
        self.posted: List[BridgeMessage] = []
        self.listeners: List[Callable[..., Any]] = []
        self.closed = False

    @property
    def has_storage(self) -> bool:
        return self.storage_available

    @property
    def has_parent(self) -> bool:
        return self.parent

    def get_item(self, key: str) -> Optional[str]:
        return self.storage.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.storage[key] = value

    def post_to_parent(self, message: BridgeMessage) -> None:
        self.posted.append(message)

    def add_message_listener(self, callback) -> None:
        self.listeners.append(callback)

    def emit(self, payload: Any, origin: str = "https://docs.example.com") -> None:
        for callback in self.listeners:
            callback(payload, origin)

    def close(self) -> None:
        self.closed = True


def api_status_error(cls, status: int) -> openai.APIStatusError:
    request = httpx.Request("GET", "https://api.openai.com/v1/models")
    response = httpx.Response(status, request=request)
    return cls(f"HTTP {status}", response=response, body=None)


def connection_error() -> openai.APIConnectionError:
    request = httpx.Request("GET", "https://api.openai.com/v1/models")
    return openai.APIConnectionError(request=request)


class _FakeModels:
    def __init__(self, error: Optional[Exception]) -> None:
        self._error = error

    def list(self):
        if self._error is not None:
            raise self._error
        return []


class _FakeClient:
    def __init__(self, error: Optional[Exception]) -> None:
        self.models = _FakeModels(error)


class FakeOpenAIFactory:
    """Stands in for ``openai.OpenAI``: only keys in ``valid_keys`` list models."""

    def __init__(self, valid_keys: Iterable[str] = (), error: Optional[Exception] = None) -> None:
        self.valid_keys = set(valid_keys)
        self.error = error
        self.calls: List[str] = []
        self.options: List[Dict[str, Any]] = []

    def __call__(self, api_key: str, **options: Any) -> _FakeClient:
        self.calls.append(api_key)
        self.options.append(options)
        if self.error is not None:
            return _FakeClient(self.error)
        if api_key in self.valid_keys:
            return _FakeClient(None)
        return _FakeClient(api_status_error(openai.AuthenticationError, 401))


@pytest.fixture
def host() -> FakeHostBridge:
    return FakeHostBridge()


@pytest.fixture
def store(tmp_path) -> CredentialStore:
    return CredentialStore(tmp_path / "env" / ".env")


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)
