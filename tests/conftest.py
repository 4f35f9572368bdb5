"""Pytest fixtures and configuration for test suite

Factory Functions:
    - make_push(push_type, **fields) -> PushNotification

Payloads are compared as compact JSON so that key order is checked,
see payload_json().
"""
import json

import pytest

from applepush.core.config import settings
from applepush.services.push.models import PushNotification, PushType


# =============================================================================
# Factory Functions for Test Objects
# =============================================================================

def make_push(push_type: PushType = PushType.ALERT, **fields) -> PushNotification:
    """
    Factory function to create PushNotification instances for testing.

    Args:
        push_type: Push type for the notification.
        **fields: Builder calls to make, keyed by field name. Supported:
            token, voip_token, alert (title, body) tuple, badge, sound,
            location, priority, container_identifier, content_available,
            mutable_content, custom (dict of custom properties).
    """
    push = PushNotification(push_type)
    if fields.get("content_available"):
        push.add_content_available()
    if fields.get("mutable_content"):
        push.add_mutable_content()
    if "alert" in fields:
        title, body = fields["alert"]
        push.add_alert(title, body)
    if "badge" in fields:
        push.add_badge(fields["badge"])
    if "sound" in fields:
        push.add_sound(fields["sound"])
    if "location" in fields:
        push.add_location(fields["location"])
    if "priority" in fields:
        push.set_priority(fields["priority"])
    if "container_identifier" in fields:
        push.add_container_identifier(fields["container_identifier"])
    if "token" in fields:
        push.add_token(fields["token"])
    if "voip_token" in fields:
        push.add_voip_token(fields["voip_token"])
    for key, value in fields.get("custom", {}).items():
        push.add_custom_property(key, value)
    return push


def payload_json(push: PushNotification) -> str:
    """Serialize a generated payload the way the reference payloads are written."""
    return json.dumps(push.generate_payload(), separators=(",", ":"))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def alert_push():
    """Alert push with title, body, badge, sound and a device token."""
    return make_push(
        PushType.ALERT,
        alert=("Front Door", "Person detected"),
        badge=1,
        sound="default",
        token="a1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8f90",
    )


@pytest.fixture
def background_push():
    """Background push with content-available."""
    return make_push(PushType.BACKGROUND, content_available=True, token="bg-device-token")


@pytest.fixture
def voip_push():
    """VoIP push with a VoIP token."""
    return make_push(PushType.VOIP, content_available=True, voip_token="voip-device-token")


@pytest.fixture
def bundle_id(monkeypatch):
    """Configure a default APNS bundle ID."""
    monkeypatch.setattr(settings, "APNS_BUNDLE_ID", "com.example.app")
    return "com.example.app"
