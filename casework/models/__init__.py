from .base import CamelModel, Priority
from .complaint import Complaint, ComplaintCreate, ComplaintStatus, ComplaintUpdate
from .meeting import Meeting, MeetingCreate, MeetingStatus, MeetingUpdate
from .notification import Notification, NotificationCreate
from .scenario import Scenario, ScenarioCreate, ScenarioUpdate
from .user import User, UserCreate, UserPublic, UserRole

__all__ = [
    "CamelModel",
    "Complaint",
    "ComplaintCreate",
    "ComplaintStatus",
    "ComplaintUpdate",
    "Meeting",
    "MeetingCreate",
    "MeetingStatus",
    "MeetingUpdate",
    "Notification",
    "NotificationCreate",
    "Priority",
    "Scenario",
    "ScenarioCreate",
    "ScenarioUpdate",
    "User",
    "UserCreate",
    "UserPublic",
    "UserRole",
]
