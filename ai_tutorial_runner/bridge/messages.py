"""Message envelope exchanged with an embedding browser host."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

API_KEY_NAME = "OPENAI_API_KEY"
DEFAULT_STORAGE_KEY = "openai_api_key"


class MessageType(str, Enum):
    """Discriminator of a bridge message."""
    SET_ENV_VAR = "SET_ENV_VAR"
    SAVE_API_KEY = "SAVE_API_KEY"
    REQUEST_API_KEY = "REQUEST_API_KEY"
    PING = "PING"


class BridgeMessage(BaseModel):
    """
    One postMessage payload.

    Delivery is at-most-once and unordered; nothing is acknowledged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: MessageType
    key: Optional[str] = None
    value: Optional[str] = None
    request_key: bool = Field(default=False, alias="requestKey")

    def to_payload(self) -> Dict[str, Any]:
        """Plain dict in the host's wire shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


def save_api_key(value: str, storage_key: str = DEFAULT_STORAGE_KEY) -> BridgeMessage:
    """Ask the host to store ``value`` under ``storage_key``."""
    return BridgeMessage(type=MessageType.SAVE_API_KEY, key=storage_key, value=value)


def request_api_key() -> BridgeMessage:
    """Ask the host to send us its stored key."""
    return BridgeMessage(type=MessageType.REQUEST_API_KEY)


def parse_message(data: Any) -> Optional[BridgeMessage]:
    """Validate an inbound payload; anything unrecognised yields None."""
    if not isinstance(data, dict):
        return None
    try:
        return BridgeMessage.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Ignoring message {data.get('type')!r}: {e.error_count()} validation errors")
        return None
