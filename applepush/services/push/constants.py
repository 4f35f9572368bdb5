"""
Constants for APNS payload building.

Key names and limits follow Apple's remote notification payload reference.
"""

# Top-level payload keys
APS_KEY = "aps"
CONTAINER_IDENTIFIER_KEY = "container-identifier"

# aps dictionary keys (serialized in this order)
CONTENT_AVAILABLE_KEY = "content-available"
MUTABLE_CONTENT_KEY = "mutable-content"
ALERT_KEY = "alert"
ALERT_TITLE_KEY = "title"
ALERT_BODY_KEY = "body"
BADGE_KEY = "badge"
SOUND_KEY = "sound"
LOCATION_KEY = "Location"  # Undocumented, capitalized on the wire

# Flags are sent as the string "1", not an integer
FLAG_ENABLED = "1"

# Defaults
DEFAULT_SOUND = "default"
DEFAULT_CONTAINER_IDENTIFIER = "NSFileProviderRootContainerItemIdentifier"

# apns-priority values
PRIORITY_MIN = 0
PRIORITY_MAX = 10
PRIORITY_IMMEDIATE = 10
PRIORITY_POWER_CONSIDERATE = 5

# Payload size limits in bytes
MAX_PAYLOAD_SIZE = 4096
MAX_VOIP_PAYLOAD_SIZE = 5120

# Request header names
APNS_PUSH_TYPE_HEADER = "apns-push-type"
APNS_PRIORITY_HEADER = "apns-priority"
APNS_TOPIC_HEADER = "apns-topic"
