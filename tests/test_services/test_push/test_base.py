"""
Tests for the PushSender interface.
"""

from typing import List

import pytest

from applepush.core.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from applepush.services.push.base import DeliveryResult, DeliveryStatus, PushSender
from applepush.services.push.request import PushRequest


class RecordingSender(PushSender):
    """Sender that records requests and reports success."""

    def __init__(self):
        self.sent: List[PushRequest] = []
        self.closed = False

    async def send(self, request: PushRequest) -> DeliveryResult:
        self.sent.append(request)
        return DeliveryResult(
            device_token=request.device_token,
            success=True,
            status=DeliveryStatus.SUCCESS,
            status_code=200,
            apns_id="apns-msg-123",
        )

    async def close(self) -> None:
        self.closed = True


class TestPushSender:
    """Tests for PushSender base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            PushSender()

    @pytest.mark.asyncio
    async def test_send_request(self, alert_push):
        sender = RecordingSender()

        result = await sender.send(alert_push.to_request())

        assert result.success is True
        assert result.status == DeliveryStatus.SUCCESS
        assert result.device_token == alert_push.token
        assert sender.sent[0].payload == alert_push.to_json().encode("utf-8")

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, background_push):
        async with RecordingSender() as sender:
            await sender.send(background_push.to_request())

        assert sender.closed is True
        assert len(sender.sent) == 1

    @pytest.mark.asyncio
    async def test_default_close_is_noop(self):
        class MinimalSender(PushSender):
            async def send(self, request):
                return DeliveryResult(device_token=request.device_token, success=False)

        async with MinimalSender() as sender:
            pass

        assert isinstance(sender, MinimalSender)


class TestSenderCorrelationId:
    """Tests for the correlation ID scoped to a sender session."""

    @pytest.mark.asyncio
    async def test_session_sets_and_clears_correlation_id(self, alert_push):
        token = set_correlation_id(None)

        async with RecordingSender() as sender:
            session_id = get_correlation_id()
            await sender.send(alert_push.to_request())

        assert session_id is not None
        assert len(session_id) == 32
        assert get_correlation_id() is None
        clear_correlation_id(token)

    @pytest.mark.asyncio
    async def test_caller_correlation_id_kept(self):
        token = set_correlation_id("batch-42")

        async with RecordingSender():
            assert get_correlation_id() == "batch-42"

        assert get_correlation_id() == "batch-42"
        clear_correlation_id(token)

    @pytest.mark.asyncio
    async def test_correlation_id_cleared_when_body_raises(self):
        token = set_correlation_id(None)
        sender = RecordingSender()

        with pytest.raises(RuntimeError):
            async with sender:
                raise RuntimeError("boom")

        assert sender.closed is True
        assert get_correlation_id() is None
        clear_correlation_id(token)


class TestDeliveryResult:
    """Tests for DeliveryResult defaults."""

    def test_defaults(self):
        result = DeliveryResult(device_token="token", success=False)

        assert result.status == DeliveryStatus.FAILED
        assert result.status_code is None
        assert result.error is None
        assert result.apns_id is None
        assert result.timestamp.tzinfo is not None

    def test_status_values(self):
        assert DeliveryStatus.INVALID_TOKEN.value == "invalid_token"
        assert DeliveryStatus.RATE_LIMITED == "rate_limited"
