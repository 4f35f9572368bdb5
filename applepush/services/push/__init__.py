"""
APNS (Apple Push Notification Service) payload building.

This package contains:
- PushNotification - validating builder for a single notification
- PushRequest - serialized payload plus destination for a transport
- PushSender - interface implemented by transports
"""

from applepush.services.push.base import (
    DeliveryResult,
    DeliveryStatus,
    PushSender,
)
from applepush.services.push.exceptions import (
    AlreadySetError,
    DuplicateKeyError,
    InvalidArgumentError,
    InvalidStateError,
    MissingFieldError,
    OutOfRangeError,
    PayloadTooLargeError,
    PushNotificationError,
)
from applepush.services.push.models import (
    PushAlert,
    PushNotification,
    PushType,
)
from applepush.services.push.request import PushRequest, max_payload_size

__all__ = [
    # Builder
    "PushNotification",
    "PushAlert",
    "PushType",
    # Transport boundary
    "PushRequest",
    "PushSender",
    "DeliveryResult",
    "DeliveryStatus",
    "max_payload_size",
    # Errors
    "PushNotificationError",
    "InvalidArgumentError",
    "AlreadySetError",
    "InvalidStateError",
    "OutOfRangeError",
    "DuplicateKeyError",
    "MissingFieldError",
    "PayloadTooLargeError",
]
