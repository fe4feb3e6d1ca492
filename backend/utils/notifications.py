"""
In-memory notification list for a signed-in user
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging
import uuid

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 20
NOTIFICATION_TYPES = ("new_message", "mentorship_request", "info")

# Length of the text prefix used to spot repeated new_message notifications
DUPLICATE_PREFIX_LENGTH = 30


@dataclass
class Notification:
    type: str
    text: str
    chat_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "text": self.text,
            "chatId": self.chat_id,
            "timestamp": self.timestamp.isoformat(),
            "isRead": self.is_read,
        }


class NotificationCenter:
    """
    Keeps the latest notifications for one user, newest first.

    Example:
        >>> center = NotificationCenter(user_id="user123")
        >>> center.add("new_message", "Hi there!", chat_id="chat1")
        >>> center.unread_count
        1
    """

    def __init__(self, user_id: str = None):
        self.user_id = user_id
        self.notifications: List[Notification] = []

        logger.debug(f"NotificationCenter initialized for user: {user_id}")

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def add(self, type: str, text: str, chat_id: Optional[str] = None) -> Optional[Notification]:
        """
        Add a notification to the top of the list.

        Args:
            type: new_message, mentorship_request or info
            text: Notification text
            chat_id: Chat the notification points to, for new_message

        Returns:
            The new notification, or None when it duplicates an existing
            new_message notification for the same chat
        """
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {type}")

        if type == "new_message" and chat_id:
            prefix = text[:DUPLICATE_PREFIX_LENGTH]
            for existing in self.notifications:
                if existing.chat_id == chat_id and existing.text.startswith(prefix):
                    logger.debug(f"Duplicate notification for chat {chat_id} dropped")
                    return None

        notification = Notification(type=type, text=text, chat_id=chat_id)
        self.notifications = [notification] + self.notifications[:MAX_NOTIFICATIONS - 1]
        return notification

    def mark_read(self, notification_id: str) -> bool:
        """
        Mark one notification as read.

        Returns:
            bool: True if an unread notification was marked
        """
        for notification in self.notifications:
            if notification.id == notification_id and not notification.is_read:
                notification.is_read = True
                return True
        return False

    def mark_all_read(self) -> None:
        for notification in self.notifications:
            notification.is_read = True

    def clear(self) -> None:
        """Drop every notification."""
        count = len(self.notifications)
        self.notifications = []
        logger.info(f"Cleared {count} notifications for user {self.user_id}")

    def to_dict(self) -> dict:
        return {
            "notifications": [n.to_dict() for n in self.notifications],
            "unreadCount": self.unread_count,
        }


# user id -> NotificationCenter, for the lifetime of the process
_CENTERS: Dict[str, NotificationCenter] = {}


def get_notification_center(user_id: str) -> NotificationCenter:
    """Notification center of a user, created on first use."""
    if user_id not in _CENTERS:
        _CENTERS[user_id] = NotificationCenter(user_id=user_id)
    return _CENTERS[user_id]


def reset_notification_centers() -> None:
    _CENTERS.clear()
