"""Optional capability for talking to an embedding browser host."""

import sys
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ai_tutorial_runner.bridge.messages import BridgeMessage
from ai_tutorial_runner.core.logging import get_logger

logger = get_logger("ai_tutorial_runner.bridge")

MessageCallback = Callable[[Optional[Dict[str, Any]], Optional[str]], Any]


class HostBridge(ABC):
    """
    Window-side operations available when running inside a browser host.

    Flows receive ``HostBridge | None``; a missing bridge turns every host
    operation into a no-op.
    """

    @property
    @abstractmethod
    def has_storage(self) -> bool:
        """Whether the host key-value store is reachable."""

    @property
    @abstractmethod
    def has_parent(self) -> bool:
        """Whether a parent window distinct from ours is reachable."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Read from the host key-value store."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Write to the host key-value store."""

    @abstractmethod
    def post_to_parent(self, message: BridgeMessage) -> None:
        """Send ``message`` to the parent window (any origin)."""

    @abstractmethod
    def add_message_listener(self, callback: MessageCallback) -> None:
        """Call ``callback(payload, origin)`` for every inbound message."""

    def close(self) -> None:
        """Release listener resources."""


class PyodideHostBridge(HostBridge):
    """Host bridge over the ``js.window`` object of a Pyodide runtime."""

    def __init__(self, window: Any):
        self.window = window
        self._listeners: List[Any] = []

    @property
    def has_storage(self) -> bool:
        return getattr(self.window, "localStorage", None) is not None

    @property
    def has_parent(self) -> bool:
        parent = getattr(self.window, "parent", None)
        return parent is not None and parent != self.window

    def get_item(self, key: str) -> Optional[str]:
        if not self.has_storage:
            return None
        return self.window.localStorage.getItem(key)

    def set_item(self, key: str, value: str) -> None:
        if self.has_storage:
            self.window.localStorage.setItem(key, value)

    def post_to_parent(self, message: BridgeMessage) -> None:
        import js
        from pyodide.ffi import to_js

        payload = to_js(message.to_payload(), dict_converter=js.Object.fromEntries)
        self.window.parent.postMessage(payload, "*")

    def add_message_listener(self, callback: MessageCallback) -> None:
        from pyodide.ffi import create_proxy

        def _on_message(event: Any) -> None:
            callback(_event_payload(event), getattr(event, "origin", None))

        proxy = create_proxy(_on_message)
        self.window.addEventListener("message", proxy)
        self._listeners.append(proxy)

    def close(self) -> None:
        for proxy in self._listeners:
            self.window.removeEventListener("message", proxy)
            proxy.destroy()
        self._listeners.clear()


def _event_payload(event: Any) -> Optional[Dict[str, Any]]:
    data = getattr(event, "data", None)
    if hasattr(data, "to_py"):
        data = data.to_py()
    return data if isinstance(data, dict) else None


def resolve_host_bridge() -> Optional[HostBridge]:
    """
    Find the embedding browser window, once, at startup.

    Returns None outside a browser-hosted runtime.
    """
    if sys.platform != "emscripten":
        logger.debug("Not in browser environment, host bridge not available")
        return None

    import js

    window = getattr(js, "window", None)
    if window is None or not hasattr(window, "addEventListener"):
        logger.info("Browser runtime has no window object")
        return None

    logger.debug("Host window found")
    return PyodideHostBridge(window)
