"""
Exceptions raised while building APNS notifications.

Every error is raised synchronously by the call that caused it. A failed
call never leaves the notification partially mutated.
"""


class PushNotificationError(Exception):
    """Base class for all push notification building errors."""
    pass


class InvalidArgumentError(PushNotificationError, ValueError):
    """Raised when a required string argument is None, empty or blank."""
    pass


class AlreadySetError(PushNotificationError):
    """Raised when a single-assignment field is set a second time."""
    pass


class InvalidStateError(PushNotificationError):
    """Raised when an operation conflicts with the push type or earlier calls."""
    pass


class OutOfRangeError(PushNotificationError, ValueError):
    """Raised when a numeric argument is outside its legal bounds."""
    pass


class DuplicateKeyError(PushNotificationError, KeyError):
    """Raised when a custom property key is added twice."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class MissingFieldError(PushNotificationError):
    """Raised when a payload or request is built without a required field."""
    pass


class PayloadTooLargeError(PushNotificationError, ValueError):
    """Raised when the encoded payload exceeds the gateway size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Payload is {size} bytes, limit is {limit} bytes")
