"""Credential bridge - local key file, host storage and parent window relay."""

from ai_tutorial_runner.bridge.host import HostBridge, PyodideHostBridge, resolve_host_bridge
from ai_tutorial_runner.bridge.listener import ApiKeyListener
from ai_tutorial_runner.bridge.messages import (
    BridgeMessage,
    MessageType,
    parse_message,
    request_api_key,
    save_api_key,
)
from ai_tutorial_runner.bridge.setup_env import setup_api_key
from ai_tutorial_runner.bridge.store import CredentialStore
from ai_tutorial_runner.bridge.sync import check_and_set_api_key, sync_api_key_to_parent

__all__ = [
    "HostBridge",
    "PyodideHostBridge",
    "resolve_host_bridge",
    "ApiKeyListener",
    "BridgeMessage",
    "MessageType",
    "parse_message",
    "request_api_key",
    "save_api_key",
    "setup_api_key",
    "CredentialStore",
    "check_and_set_api_key",
    "sync_api_key_to_parent",
]
