"""Import all models so metadata.create_all sees every table."""
from chat_hub.infrastructure.db.models.meeting import MeetingModel, meeting_participants
from chat_hub.infrastructure.db.models.membership import MembershipModel
from chat_hub.infrastructure.db.models.message import MessageModel
from chat_hub.infrastructure.db.models.notification import NotificationModel
from chat_hub.infrastructure.db.models.reaction import ReactionModel
from chat_hub.infrastructure.db.models.room import RoomModel
from chat_hub.infrastructure.db.models.user import UserModel
from chat_hub.infrastructure.db.models.work_session import WorkSessionModel

__all__ = [
    "MeetingModel",
    "MembershipModel",
    "MessageModel",
    "NotificationModel",
    "ReactionModel",
    "RoomModel",
    "UserModel",
    "WorkSessionModel",
    "meeting_participants",
]
