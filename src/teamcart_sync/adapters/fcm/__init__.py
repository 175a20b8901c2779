"""FCM adapters – HTTP v1 sender and the team cart push notifier."""
from teamcart_sync.adapters.fcm.messages import EVENT_TAGS, build_data_payload, compose_message, event_tag
from teamcart_sync.adapters.fcm.push_notifier import Audience, TeamCartPushNotifier
from teamcart_sync.adapters.fcm.sender import FcmConfig, FcmPushSender, SendResult

__all__ = [
    "EVENT_TAGS",
    "Audience",
    "FcmConfig",
    "FcmPushSender",
    "SendResult",
    "TeamCartPushNotifier",
    "build_data_payload",
    "compose_message",
    "event_tag",
]
