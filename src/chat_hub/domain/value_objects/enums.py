from __future__ import annotations

from enum import StrEnum


class RoomKind(StrEnum):
    PRIVATE = "private"
    GROUP = "group"


class MessageKind(StrEnum):
    TEXT = "text"
    FILE = "file"
    VOICE = "voice"
    MEETING_LINK = "meeting_link"


class UserRole(StrEnum):
    EMPLOYEE = "employee"
    SUB_ADMIN = "sub-admin"
    ADMIN = "admin"


class FrameType(StrEnum):
    """Inbound realtime frame kinds (client → server)."""

    SUBSCRIBE = "subscribe"
    AUX_UPDATE = "aux_update"
    CALL_OFFER = "call_offer"
    CALL_ANSWER = "call_answer"
    ICE_CANDIDATE = "ice_candidate"
    CALL_END = "call_end"


class EventType(StrEnum):
    """Outbound broadcast event kinds (server → every client)."""

    AUX_STATUS_UPDATE = "aux_status_update"
    EMPLOYEE_STATUS_UPDATE = "employee_status_update"
    NEW_MESSAGE = "new_message"
    MESSAGE_UPDATED = "message_updated"
    MESSAGE_DELETED = "message_deleted"
    REACTION_ADDED = "reaction_added"
    REACTION_REMOVED = "reaction_removed"
    NEW_NOTIFICATION = "new_notification"
    NEW_MEETING = "new_meeting"


SIGNALING_FRAMES = frozenset(
    {
        FrameType.CALL_OFFER,
        FrameType.CALL_ANSWER,
        FrameType.ICE_CANDIDATE,
        FrameType.CALL_END,
    }
)
