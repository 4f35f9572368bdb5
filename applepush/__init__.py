"""
applepush: build and validate Apple push notification payloads.
"""

from applepush.services.push import (
    PushAlert,
    PushNotification,
    PushRequest,
    PushSender,
    PushType,
)

__version__ = "1.0.0"

__all__ = [
    "PushAlert",
    "PushNotification",
    "PushRequest",
    "PushSender",
    "PushType",
    "__version__",
]
