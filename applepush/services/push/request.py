"""
Transport request built from a PushNotification.

A PushRequest is everything a sender needs to deliver one notification:
the encoded payload, the destination token, the push type and priority.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from applepush.core.config import settings
from applepush.core.logging_config import get_logger, sanitize_log_value
from applepush.services.push.constants import (
    APNS_PRIORITY_HEADER,
    APNS_PUSH_TYPE_HEADER,
    APNS_TOPIC_HEADER,
    MAX_PAYLOAD_SIZE,
    MAX_VOIP_PAYLOAD_SIZE,
)
from applepush.services.push.exceptions import (
    InvalidArgumentError,
    MissingFieldError,
    PayloadTooLargeError,
)
from applepush.services.push.models import PushNotification, PushType

logger = get_logger(__name__)


def max_payload_size(push_type: PushType) -> int:
    """Gateway payload limit in bytes for the given push type."""
    if push_type is PushType.VOIP:
        return MAX_VOIP_PAYLOAD_SIZE
    return MAX_PAYLOAD_SIZE


@dataclass(frozen=True)
class PushRequest:
    """
    Serialized notification ready for a PushSender.

    Attributes:
        payload: UTF-8 encoded JSON payload
        device_token: Device token or VoIP token
        push_type: Push type (apns-push-type)
        priority: Effective priority (apns-priority)
    """

    payload: bytes
    device_token: str
    push_type: PushType
    priority: int

    @classmethod
    def from_notification(
        cls,
        push: PushNotification,
        enforce_size_limit: Optional[bool] = None,
    ) -> "PushRequest":
        """
        Build a request from a finished notification.

        Args:
            push: Notification with a token or VoIP token added
            enforce_size_limit: Reject payloads over the gateway limit.
                Defaults to settings.APNS_ENFORCE_PAYLOAD_LIMIT.

        Raises:
            MissingFieldError: No token, or a required payload field is missing
            PayloadTooLargeError: Encoded payload exceeds the limit
        """
        device_token = push.voip_token or push.token
        if not device_token:
            raise MissingFieldError(
                "add_token() or add_voip_token() must be called before building a request"
            )

        payload = push.to_json().encode("utf-8")

        if enforce_size_limit is None:
            enforce_size_limit = settings.APNS_ENFORCE_PAYLOAD_LIMIT
        limit = max_payload_size(push.push_type)
        if enforce_size_limit and len(payload) > limit:
            raise PayloadTooLargeError(len(payload), limit)

        logger.debug(
            "Built APNS request",
            extra={
                "device_token": sanitize_log_value(device_token[:20]) + "...",
                "push_type": push.push_type.value,
                "priority": push.priority,
                "payload_bytes": len(payload),
            }
        )

        return cls(
            payload=payload,
            device_token=device_token,
            push_type=push.push_type,
            priority=push.priority,
        )

    def topic(self, bundle_id: Optional[str] = None) -> str:
        """
        apns-topic for this request.

        Args:
            bundle_id: App bundle ID. Defaults to settings.APNS_BUNDLE_ID.
        """
        bundle_id = bundle_id if bundle_id is not None else settings.APNS_BUNDLE_ID
        if bundle_id is None or not bundle_id.strip():
            raise InvalidArgumentError("bundle_id cannot be None or whitespace")
        return f"{bundle_id}{self.push_type.topic_suffix}"

    def headers(self, bundle_id: Optional[str] = None) -> Dict[str, str]:
        """Gateway request headers (authorization is left to the sender)."""
        return {
            APNS_PUSH_TYPE_HEADER: self.push_type.value,
            APNS_PRIORITY_HEADER: str(self.priority),
            APNS_TOPIC_HEADER: self.topic(bundle_id),
        }
