"""
APNS notification models.

Defines the push type, the alert value object and the PushNotification
builder that validates attributes as they are added and renders the
gateway payload.

See: https://developer.apple.com/documentation/usernotifications/generating-a-remote-notification
"""

import copy
import json
import warnings
from dataclasses import InitVar, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from applepush.core.logging_config import get_logger
from applepush.services.push.constants import (
    ALERT_BODY_KEY,
    ALERT_KEY,
    ALERT_TITLE_KEY,
    APS_KEY,
    BADGE_KEY,
    CONTAINER_IDENTIFIER_KEY,
    CONTENT_AVAILABLE_KEY,
    DEFAULT_CONTAINER_IDENTIFIER,
    DEFAULT_SOUND,
    FLAG_ENABLED,
    LOCATION_KEY,
    MUTABLE_CONTENT_KEY,
    PRIORITY_IMMEDIATE,
    PRIORITY_MAX,
    PRIORITY_MIN,
    PRIORITY_POWER_CONSIDERATE,
    SOUND_KEY,
)
from applepush.services.push.exceptions import (
    AlreadySetError,
    DuplicateKeyError,
    InvalidArgumentError,
    InvalidStateError,
    MissingFieldError,
    OutOfRangeError,
)

if TYPE_CHECKING:
    from applepush.services.push.request import PushRequest

logger = get_logger(__name__)


class PushType(str, Enum):
    """Push type, sent to the gateway as the apns-push-type header."""

    ALERT = "alert"
    BACKGROUND = "background"
    VOIP = "voip"
    FILE_PROVIDER = "fileprovider"

    @property
    def topic_suffix(self) -> str:
        """Suffix appended to the bundle ID to form the apns-topic."""
        if self is PushType.VOIP:
            return ".voip"
        if self is PushType.FILE_PROVIDER:
            return ".pushkit.fileprovider"
        return ""


@dataclass(frozen=True)
class PushAlert:
    """
    Alert title and body.

    The body is required. Pass strict=False to skip that check; only
    PushNotification.add_alert does so.
    """

    title: Optional[str]
    body: Optional[str]
    strict: InitVar[bool] = True

    def __post_init__(self, strict: bool):
        if strict and self.body is None:
            raise InvalidArgumentError("Alert body cannot be None")


def _require_text(value: Optional[str], name: str) -> None:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{name} cannot be None or whitespace")


def _require_int(value: Any, name: str) -> None:
    # bool is an int subclass but is not a valid count or priority
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}")


class PushNotification:
    """
    Builder for a single APNS notification.

    Attributes are added through chained add_* calls. Each call validates
    against the push type and the attributes already present, and raises
    before touching any state when the addition is not allowed.

    Usage:
        push = (
            PushNotification(PushType.ALERT)
            .add_alert("Front Door", "Person detected")
            .add_badge(1)
            .add_sound()
            .add_token(device_token)
        )
        payload = push.generate_payload()

    Instances are not thread-safe while being built. Once mutation has
    stopped, generate_payload() may be called from any number of readers.

    Attributes:
        token: Device token (not for VoIP pushes)
        voip_token: VoIP device token (VoIP pushes only)
        custom_priority: Priority override in [0, 10]
        alert: Alert title/body pair
        send_alert_as_text: Render the alert as a plain body string
        badge: App icon badge number
        sound: Sound name
        location: Undocumented location field, not guaranteed to work
        is_content_available: Silent/background update flag
        is_mutable_content: Enable Notification Service Extension
        container_identifier: File provider container to refresh
        custom_properties: Extra top-level payload keys
    """

    def __init__(self, push_type: PushType):
        self._push_type = PushType(push_type)

        self.token: Optional[str] = None
        self.voip_token: Optional[str] = None
        self.custom_priority: Optional[int] = None
        self.alert: Optional[PushAlert] = None
        self.send_alert_as_text = False
        self.badge: Optional[int] = None
        self.sound: Optional[str] = None
        self.location: Optional[str] = None
        self.is_content_available = False
        self.is_mutable_content = False
        self.container_identifier: Optional[str] = None
        self.custom_properties: Optional[Dict[str, Any]] = None

    def __repr__(self) -> str:
        return f"PushNotification(push_type={self._push_type.value!r})"

    @property
    def push_type(self) -> PushType:
        return self._push_type

    @property
    def priority(self) -> int:
        """Custom priority if set, else 5 for background pushes and 10 otherwise."""
        if self.custom_priority is not None:
            return self.custom_priority
        if self._push_type is PushType.BACKGROUND:
            return PRIORITY_POWER_CONSIDERATE
        return PRIORITY_IMMEDIATE

    # -------------------------------------------------------------------------
    # Deprecated factories
    # -------------------------------------------------------------------------

    @classmethod
    def create_content_available(cls, send_as_voip: bool = False) -> "PushNotification":
        """
        Create a content-available push.

        Deprecated: use PushNotification(PushType.BACKGROUND).add_content_available().

        Args:
            send_as_voip: Use the voip push type instead of background
        """
        warnings.warn(
            "create_content_available() is deprecated, use add_content_available() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        push = cls(PushType.VOIP if send_as_voip else PushType.BACKGROUND)
        push.is_content_available = True
        return push

    @classmethod
    def create_alert(
        cls,
        alert: Union[PushAlert, str],
        send_as_voip: bool = False,
    ) -> "PushNotification":
        """
        Create an alert push.

        Deprecated: use PushNotification(PushType.ALERT).add_alert().

        Args:
            alert: Alert pair, or a plain string sent as the alert text
            send_as_voip: Use the voip push type instead of alert
        """
        warnings.warn(
            "create_alert() is deprecated, use add_alert() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        push = cls(PushType.VOIP if send_as_voip else PushType.ALERT)
        if isinstance(alert, PushAlert):
            push.alert = alert
        else:
            push.alert = PushAlert(None, alert)
            push.send_alert_as_text = True
        return push

    # -------------------------------------------------------------------------
    # Builder operations
    # -------------------------------------------------------------------------

    def add_content_available(self) -> "PushNotification":
        """Add `content-available: 1` to the payload."""
        self.is_content_available = True
        return self

    def add_mutable_content(self) -> "PushNotification":
        """Add `mutable-content: 1` to the payload."""
        self.is_mutable_content = True
        return self

    def add_container_identifier(
        self,
        identifier: str = DEFAULT_CONTAINER_IDENTIFIER,
    ) -> "PushNotification":
        """
        Add `container-identifier` to the payload.

        Only valid for file provider pushes. Use the container's
        itemIdentifier, NSFileProviderRootContainerItemIdentifier for the root
        container, or NSFileProviderWorkingSetContainerItemIdentifier for the
        working set.
        """
        if self._push_type is not PushType.FILE_PROVIDER:
            raise InvalidStateError(
                "Container identifier can only be added to fileprovider pushes"
            )
        if self.container_identifier is not None:
            raise AlreadySetError("Container identifier is already set")
        self.container_identifier = identifier
        return self

    def add_alert(
        self,
        title: Optional[str] = None,
        body: Optional[str] = None,
    ) -> "PushNotification":
        """
        Add an alert to the payload.

        Without a title the alert is sent as a plain string. The body is not
        checked here, unlike PushAlert(title, body).
        """
        self.alert = PushAlert(title, body, strict=False)
        if title is None:
            self.send_alert_as_text = True
        return self

    def set_priority(self, priority: int) -> "PushNotification":
        _require_int(priority, "priority")
        if priority < PRIORITY_MIN or priority > PRIORITY_MAX:
            raise OutOfRangeError(
                f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}, got {priority}"
            )
        self.custom_priority = priority
        return self

    def add_badge(self, badge: int) -> "PushNotification":
        _require_int(badge, "badge")
        self._ensure_not_content_available()
        if self.badge is not None:
            raise AlreadySetError("Badge is already set")
        self.badge = badge
        return self

    def add_sound(self, sound: str = DEFAULT_SOUND) -> "PushNotification":
        _require_text(sound, "sound")
        self._ensure_not_content_available()
        if self.sound is not None:
            raise AlreadySetError("Sound is already set")
        self.sound = sound
        return self

    def add_location(self, location: str) -> "PushNotification":
        """Add the undocumented `Location` field. Not guaranteed to work."""
        _require_text(location, "location")
        self._ensure_not_content_available()
        if self.location is not None:
            raise AlreadySetError("Location is already set")
        self.location = location
        return self

    def add_token(self, token: str) -> "PushNotification":
        _require_text(token, "token")
        self._ensure_no_token()
        if self._push_type is PushType.VOIP:
            raise InvalidStateError("Use add_voip_token() for voip pushes")
        self.token = token
        return self

    def add_voip_token(self, voip_token: str) -> "PushNotification":
        _require_text(voip_token, "voip_token")
        self._ensure_no_token()
        if self._push_type is not PushType.VOIP:
            raise InvalidStateError("VoIP token may only be used with voip pushes")
        self.voip_token = voip_token
        return self

    def add_custom_property(self, key: str, value: Any) -> "PushNotification":
        if not isinstance(key, str):
            raise InvalidArgumentError(
                f"Custom property key must be a string, got {type(key).__name__}"
            )
        if self.custom_properties is None:
            self.custom_properties = {}
        if key in self.custom_properties:
            raise DuplicateKeyError(f"Custom property '{key}' is already set")
        self.custom_properties[key] = value
        return self

    def _ensure_no_token(self) -> None:
        if self.token or self.voip_token:
            raise AlreadySetError("Notification already has a token")

    def _ensure_not_content_available(self) -> None:
        if self.is_content_available:
            raise InvalidStateError("Cannot add fields to a push with content-available")

    # -------------------------------------------------------------------------
    # Payload generation
    # -------------------------------------------------------------------------

    def generate_payload(self) -> Dict[str, Any]:
        """
        Build the gateway payload.

        Fileprovider pushes yield only the container identifier. All other
        types yield an `aps` dictionary, followed by custom properties at the
        top level. Key order is stable and absent fields are omitted.

        Returns:
            Dictionary ready for JSON serialization.

        Raises:
            MissingFieldError: Fileprovider push without a container identifier
        """
        if self._push_type is PushType.FILE_PROVIDER:
            if self.container_identifier is None:
                raise MissingFieldError(
                    "add_container_identifier() must be called before generating "
                    "a fileprovider payload"
                )
            return {CONTAINER_IDENTIFIER_KEY: self.container_identifier}

        aps: Dict[str, Any] = {}
        if self.is_content_available:
            aps[CONTENT_AVAILABLE_KEY] = FLAG_ENABLED
        if self.is_mutable_content:
            aps[MUTABLE_CONTENT_KEY] = FLAG_ENABLED

        if self.alert is not None:
            if self.send_alert_as_text:
                if self.alert.body is not None:
                    aps[ALERT_KEY] = self.alert.body
            else:
                alert_dict = {ALERT_TITLE_KEY: self.alert.title}
                if self.alert.body is not None:
                    alert_dict[ALERT_BODY_KEY] = self.alert.body
                aps[ALERT_KEY] = alert_dict

        if self.badge is not None:
            aps[BADGE_KEY] = self.badge
        if self.sound is not None:
            aps[SOUND_KEY] = self.sound
        if self.location is not None:
            aps[LOCATION_KEY] = self.location

        payload: Dict[str, Any] = {APS_KEY: aps}

        # Custom properties sit beside aps, deep-copied so the payload shares
        # no objects with the builder
        if self.custom_properties:
            for key, value in self.custom_properties.items():
                payload[key] = copy.deepcopy(value)

        logger.debug(
            "Generated APNS payload",
            extra={
                "push_type": self._push_type.value,
                "aps_keys": list(aps),
                "custom_keys": list(self.custom_properties or ()),
            }
        )

        return payload

    def to_json(self) -> str:
        """Serialize the payload to compact JSON, preserving key order."""
        return json.dumps(
            self.generate_payload(),
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def to_request(self, enforce_size_limit: Optional[bool] = None) -> "PushRequest":
        """
        Build the transport request for this notification.

        Args:
            enforce_size_limit: Reject oversized payloads. Defaults to
                settings.APNS_ENFORCE_PAYLOAD_LIMIT.
        """
        from applepush.services.push.request import PushRequest

        return PushRequest.from_notification(self, enforce_size_limit=enforce_size_limit)
