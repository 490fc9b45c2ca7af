"""Listen for API key messages from the embedding host."""

import asyncio
from typing import Any, Dict, Optional

from ai_tutorial_runner.bridge.host import HostBridge
from ai_tutorial_runner.bridge.messages import (
    API_KEY_NAME,
    DEFAULT_STORAGE_KEY,
    MessageType,
    parse_message,
    request_api_key,
    save_api_key,
)
from ai_tutorial_runner.bridge.store import CredentialStore
from ai_tutorial_runner.bridge.sync import post_to_parent, read_from_storage, sync_api_key_to_parent
from ai_tutorial_runner.core.logging import get_logger, log_bridge_event, mask_key

logger = get_logger("ai_tutorial_runner.bridge")


class ApiKeyListener:
    """
    Keeps the credential file in step with the host window.

    Handles:
    - ``SET_ENV_VAR`` for ``OPENAI_API_KEY``: overwrite the file, echo
      ``SAVE_API_KEY`` to the parent
    - ``PING`` with ``requestKey``: push our key, or ask for one
    - startup: copy any key found in host storage into the file
    """

    def __init__(
        self,
        store: CredentialStore,
        bridge: Optional[HostBridge],
        storage_key: str = DEFAULT_STORAGE_KEY,
        sync_delay: float = 2.0,
    ):
        self.store = store
        self.bridge = bridge
        self.storage_key = storage_key
        self.sync_delay = sync_delay
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> bool:
        """
        Subscribe to host messages and load any stored key.

        Returns:
            False when there is no host window to listen to
        """
        if self.bridge is None:
            logger.info("Not in browser environment, API key listener not available")
            return False

        self.bridge.add_message_listener(self.handle_message)
        self._started = True
        self.load_from_host_storage()
        logger.info("Listener setup complete")
        return True

    def stop(self) -> None:
        if self.bridge is not None and self._started:
            self.bridge.close()
        self._started = False

    def schedule_sync(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> Optional[asyncio.TimerHandle]:
        """Push the file's key to the parent once, after ``sync_delay``."""
        if self.bridge is None:
            return None
        loop = loop or asyncio.get_running_loop()
        return loop.call_later(self.sync_delay, self.sync)

    def sync(self) -> bool:
        return sync_api_key_to_parent(self.store, self.bridge, self.storage_key)

    def handle_message(self, payload: Optional[Dict[str, Any]], origin: Optional[str] = None) -> None:
        """Dispatch one inbound message; never raises."""
        message = parse_message(payload)
        if message is None:
            return

        log_bridge_event(message.type.value, direction="inbound", origin=origin)

        if message.type == MessageType.PING and message.request_key:
            self._handle_ping()
        elif message.type == MessageType.SET_ENV_VAR and message.key == API_KEY_NAME:
            self._handle_set_env_var(message.value)

    def load_from_host_storage(self) -> Optional[str]:
        """Persist a key found in host storage to the credential file."""
        stored = read_from_storage(self.bridge, self.storage_key)
        if stored is None:
            logger.info("No API key found in host storage")
            return None

        logger.info("Found API key in host storage", key=mask_key(stored))
        try:
            return self.store.write(stored)
        except OSError as e:
            logger.error("Failed to save API key", error=str(e))
            return None

    def _handle_ping(self) -> None:
        api_key = self.store.read()
        if api_key:
            logger.info("Sending API key from credential file to parent")
            post_to_parent(self.bridge, save_api_key(api_key, self.storage_key))
            return

        logger.info("Requesting API key from parent")
        post_to_parent(self.bridge, request_api_key())

    def _handle_set_env_var(self, value: Optional[str]) -> None:
        if not value or not value.strip():
            logger.warning("Received empty API key")
            return

        logger.info("Received API key from parent window", key=mask_key(value.strip()))
        try:
            written = self.store.write(value)
        except OSError as e:
            logger.error("Failed to save API key", error=str(e))
            return

        post_to_parent(self.bridge, save_api_key(written, self.storage_key))
