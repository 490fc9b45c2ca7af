"""Push the file's key to the host, and pull the host's key into the file."""

from typing import Optional

from ai_tutorial_runner.bridge.host import HostBridge
from ai_tutorial_runner.bridge.messages import DEFAULT_STORAGE_KEY, BridgeMessage, save_api_key
from ai_tutorial_runner.bridge.store import CredentialStore
from ai_tutorial_runner.core.logging import get_logger, log_bridge_event, mask_key

logger = get_logger("ai_tutorial_runner.bridge")


def post_to_parent(bridge: Optional[HostBridge], message: BridgeMessage) -> bool:
    """Best-effort send to the parent window; failures are logged."""
    if bridge is None or not bridge.has_parent:
        logger.debug("No parent window available", message_type=message.type.value)
        return False
    try:
        bridge.post_to_parent(message)
    except Exception as e:
        logger.warning("Failed to post message to parent", message_type=message.type.value, error=str(e))
        return False
    log_bridge_event(message.type.value, direction="outbound")
    return True


def mirror_to_storage(bridge: Optional[HostBridge], value: str, storage_key: str = DEFAULT_STORAGE_KEY) -> bool:
    """Best-effort write to host storage, verified by reading it back."""
    if bridge is None or not bridge.has_storage:
        return False
    try:
        bridge.set_item(storage_key, value)
        verified = bridge.get_item(storage_key) == value
    except Exception as e:
        logger.warning("Could not save to host storage", error=str(e))
        return False

    if verified:
        logger.info("API key saved to host storage", key=mask_key(value))
    else:
        logger.warning("Key saved to host storage but verification failed")
    return verified


def read_from_storage(bridge: Optional[HostBridge], storage_key: str = DEFAULT_STORAGE_KEY) -> Optional[str]:
    """Best-effort read from host storage."""
    if bridge is None or not bridge.has_storage:
        return None
    try:
        stored = bridge.get_item(storage_key)
    except Exception as e:
        logger.warning("Cannot access host storage", error=str(e))
        return None
    stored = (stored or "").strip()
    return stored or None


def sync_api_key_to_parent(
    store: CredentialStore,
    bridge: Optional[HostBridge],
    storage_key: str = DEFAULT_STORAGE_KEY,
) -> bool:
    """
    Push the credential file's key to the parent window.

    Repairs host state after a reload when the listener did not receive a
    push in time. Also mirrors into local host storage when reachable.

    Returns:
        True if a message was posted to the parent
    """
    api_key = store.read()
    if api_key is None:
        logger.info("No API key in credential file, nothing to sync", path=str(store.env_path))
        return False

    if bridge is None:
        logger.debug("No host window, skipping sync")
        return False

    logger.info("Syncing API key to parent window", key=mask_key(api_key))
    sent = post_to_parent(bridge, save_api_key(api_key, storage_key))
    mirror_to_storage(bridge, api_key, storage_key)
    return sent


def check_and_set_api_key(
    store: CredentialStore,
    bridge: Optional[HostBridge],
    storage_key: str = DEFAULT_STORAGE_KEY,
) -> Optional[str]:
    """
    Startup convenience: pull a key from host storage into the file.

    A key already in the file is kept unless host storage holds a different
    one. Never raises.

    Returns:
        The key now in effect, or None if there is none
    """
    try:
        stored = read_from_storage(bridge, storage_key)
        existing = store.read()

        if existing and (stored is None or stored == existing):
            logger.info("API key already configured", path=str(store.env_path))
            return existing
        if existing:
            logger.info("Updating API key from host storage", key=mask_key(stored))

        if stored:
            return store.write(stored)

        logger.info("No API key found in host storage or credential file")
        return None
    except Exception as e:
        logger.warning("API key check failed", error=str(e))
        return None
