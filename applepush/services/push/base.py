"""
Transport interface for delivering push requests.

Delivery (HTTP/2, certificate or token auth, retries) is implemented
outside this package. Senders accept a PushRequest and report a
DeliveryResult.
"""

import contextvars
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from applepush.core.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)
from applepush.services.push.request import PushRequest

logger = get_logger(__name__)


class DeliveryStatus(str, Enum):
    """Delivery status for push notifications."""

    SUCCESS = "success"
    FAILED = "failed"
    INVALID_TOKEN = "invalid_token"
    RATE_LIMITED = "rate_limited"
    AUTH_ERROR = "auth_error"
    SERVER_ERROR = "server_error"


@dataclass
class DeliveryResult:
    """Result of a push notification delivery attempt."""

    device_token: str
    success: bool
    status: DeliveryStatus = DeliveryStatus.FAILED
    status_code: Optional[int] = None
    error: Optional[str] = None
    error_reason: Optional[str] = None  # APNS reason from the response body
    apns_id: Optional[str] = None  # APNS unique notification ID
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class PushSender(ABC):
    """
    Abstract sender for push requests.

    Usage:
        async with MySender(...) as sender:
            result = await sender.send(push.to_request())

    Inside `async with`, every log record carries a correlation ID for the
    session (generated unless one is already set by the caller).
    """

    _correlation_token: Optional[contextvars.Token] = None

    @abstractmethod
    async def send(self, request: PushRequest) -> DeliveryResult:
        """
        Deliver a single request.

        Args:
            request: Serialized notification with destination token

        Returns:
            DeliveryResult describing the outcome
        """
        pass

    async def close(self) -> None:
        """Release transport resources. Default is a no-op."""
        pass

    async def __aenter__(self) -> "PushSender":
        self._correlation_token = set_correlation_id(get_correlation_id() or uuid.uuid4().hex)
        logger.debug("Push sender session opened", extra={"sender": type(self).__name__})
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            await self.close()
            logger.debug("Push sender session closed", extra={"sender": type(self).__name__})
        finally:
            if self._correlation_token is not None:
                clear_correlation_id(self._correlation_token)
                self._correlation_token = None
