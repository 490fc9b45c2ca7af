import io

import openai
import pytest

from ai_tutorial_runner.bridge.setup_env import mirror_api_key, setup_api_key
from ai_tutorial_runner.core.exceptions import (
    CredentialConnectionError,
    CredentialEmptyError,
    CredentialInvalidError,
    CredentialRateLimitedError,
    UserCancelled,
)
from conftest import FakeHostBridge, FakeOpenAIFactory, api_status_error, connection_error


def _setup(store, typed: str, factory, host=None, console=None):
    return setup_api_key(
        store,
        host,
        console=console,
        stream=io.StringIO(typed),
        client_factory=factory,
    )


def test_valid_key_is_saved_and_mirrored(store, host, quiet_console) -> None:
    factory = FakeOpenAIFactory(valid_keys=["sk-good"])

    result = _setup(store, "  sk-good  \n", factory, host, quiet_console)

    assert result == "sk-good"
    assert store.env_path.read_bytes() == b"OPENAI_API_KEY=sk-good\n"
    assert host.storage == {"openai_api_key": "sk-good"}
    assert [m.value for m in host.posted] == ["sk-good"]
    output = quiet_console.file.getvalue()
    assert "Connection successful" in output
    assert "env/" in output


def test_valid_key_without_host(store, quiet_console) -> None:
    factory = FakeOpenAIFactory(valid_keys=["sk-good"])

    assert _setup(store, "sk-good\n", factory, None, quiet_console) == "sk-good"
    assert store.read() == "sk-good"


@pytest.mark.parametrize("typed", ["\n", "   \n"])
def test_blank_input_is_rejected(store, host, quiet_console, typed) -> None:
    factory = FakeOpenAIFactory()

    with pytest.raises(CredentialEmptyError):
        _setup(store, typed, factory, host, quiet_console)

    assert factory.calls == []
    assert not store.exists()
    assert host.posted == []


def test_invalid_key_writes_nothing(store, host, quiet_console) -> None:
    with pytest.raises(CredentialInvalidError) as excinfo:
        _setup(store, "sk-bad\n", FakeOpenAIFactory(), host, quiet_console)

    assert excinfo.value.status_code == 401
    assert not store.exists()
    assert host.storage == {}


def test_rate_limited_validation_writes_nothing(store, quiet_console) -> None:
    factory = FakeOpenAIFactory(error=api_status_error(openai.RateLimitError, 429))

    with pytest.raises(CredentialRateLimitedError):
        _setup(store, "sk-any\n", factory, console=quiet_console)

    assert not store.exists()


def test_connection_failure_writes_nothing(store, quiet_console) -> None:
    factory = FakeOpenAIFactory(error=connection_error())

    with pytest.raises(CredentialConnectionError):
        _setup(store, "sk-any\n", factory, console=quiet_console)

    assert not store.exists()


def test_existing_valid_key_skips_prompt(store, host, quiet_console) -> None:
    store.write("sk-existing")
    factory = FakeOpenAIFactory(valid_keys=["sk-existing"])

    assert _setup(store, "", factory, host, quiet_console) == "sk-existing"

    assert factory.calls == ["sk-existing"]
    assert host.posted == []
    assert "already configured and valid" in quiet_console.file.getvalue()


def test_existing_invalid_key_is_replaced(store, quiet_console) -> None:
    store.write("sk-expired")
    factory = FakeOpenAIFactory(valid_keys=["sk-fresh"])

    assert _setup(store, "sk-fresh\n", factory, console=quiet_console) == "sk-fresh"

    assert store.read() == "sk-fresh"
    assert "Existing API key is invalid" in quiet_console.file.getvalue()


def test_mirror_api_key_is_best_effort() -> None:
    assert mirror_api_key(None, "sk-x") is False
    assert mirror_api_key(FakeHostBridge(parent=False, storage_available=False), "sk-x") is False

    host = FakeHostBridge(parent=False)
    assert mirror_api_key(host, "sk-x") is True
    assert host.storage["openai_api_key"] == "sk-x"


class _WritesDuringValidation(FakeOpenAIFactory):
    """Another entry point saves ``written`` while the typed key is being checked."""

    def __init__(self, store, typed, written, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self.typed = typed
        self.written = written

    def __call__(self, api_key, **options):
        if api_key == self.typed and not self.store.exists():
            self.store.write(self.written)
        return super().__call__(api_key, **options)


def _failing_write(store, monkeypatch, leave_behind=None):
    def write(value):
        if leave_behind is not None:
            store.env_path.parent.mkdir(parents=True, exist_ok=True)
            store.env_path.write_text(f"OPENAI_API_KEY={leave_behind}\n")
        raise PermissionError(13, "Permission denied", str(store.env_path))

    monkeypatch.setattr(store, "write", write)


def test_closed_input_cancels_setup(store, host, quiet_console) -> None:
    factory = FakeOpenAIFactory()

    with pytest.raises(UserCancelled):
        _setup(store, "", factory, host, quiet_console)

    assert factory.calls == []
    assert not store.exists()
    assert host.posted == []


def test_same_key_saved_meanwhile_is_kept_and_mirrored(store, host, quiet_console) -> None:
    factory = _WritesDuringValidation(store, "sk-good", "sk-good", valid_keys=["sk-good"])

    assert _setup(store, "sk-good\n", factory, host, quiet_console) == "sk-good"

    assert store.read() == "sk-good"
    assert "API key already saved" in quiet_console.file.getvalue()
    assert host.storage == {"openai_api_key": "sk-good"}
    assert [m.value for m in host.posted] == ["sk-good"]


def test_other_valid_key_saved_meanwhile_wins(store, host, quiet_console) -> None:
    factory = _WritesDuringValidation(store, "sk-mine", "sk-theirs", valid_keys=["sk-mine", "sk-theirs"])

    assert _setup(store, "sk-mine\n", factory, host, quiet_console) == "sk-theirs"

    assert store.read() == "sk-theirs"
    assert "Another process has already configured" in quiet_console.file.getvalue()
    assert factory.calls == ["sk-mine", "sk-theirs"]


def test_other_invalid_key_saved_meanwhile_is_overwritten(store, quiet_console) -> None:
    factory = _WritesDuringValidation(store, "sk-mine", "sk-stale", valid_keys=["sk-mine"])

    assert _setup(store, "sk-mine\n", factory, console=quiet_console) == "sk-mine"

    assert store.read() == "sk-mine"
    assert "API key saved to" in quiet_console.file.getvalue()


def test_write_failure_falls_back_to_valid_key_on_disk(store, host, quiet_console, monkeypatch) -> None:
    _failing_write(store, monkeypatch, leave_behind="sk-theirs")
    factory = FakeOpenAIFactory(valid_keys=["sk-mine", "sk-theirs"])

    assert _setup(store, "sk-mine\n", factory, host, quiet_console) == "sk-theirs"

    assert "Another process has already configured" in quiet_console.file.getvalue()
    assert host.posted == []


def test_write_failure_without_fallback_warns_and_continues(store, host, quiet_console, monkeypatch) -> None:
    _failing_write(store, monkeypatch)
    factory = FakeOpenAIFactory(valid_keys=["sk-mine"])

    assert _setup(store, "sk-mine\n", factory, host, quiet_console) == "sk-mine"

    assert not store.exists()
    assert "Could not write to file, but continuing" in quiet_console.file.getvalue()
    assert host.posted == []
