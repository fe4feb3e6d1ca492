"""
Chat models for two-party sessions and their messages.
"""

from mongoengine import (
    Document, StringField, DateTimeField, ListField, ReferenceField, CASCADE
)
from datetime import datetime, timezone


def make_pair_key(user_a: str, user_b: str) -> str:
    """Order-independent key for a pair of participants."""
    return ":".join(sorted([user_a, user_b]))


class ChatSessionModel(Document):
    """Model for a chat between exactly two users."""

    participant_ids = ListField(StringField(), required=True, db_field="participantIds")
    pair_key = StringField(required=True, unique=True, db_field="pairKey")
    student_id = StringField(required=True, db_field="studentId")
    alumni_id = StringField(required=True, db_field="alumniId")
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")
    last_message_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="lastMessageAt")
    last_message_text = StringField(default="", db_field="lastMessageText")
    last_message_sender_id = StringField(default="", db_field="lastMessageSenderId")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "chats",
        "indexes": [
            "participant_ids",
            "-last_message_at"
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "participantIds": list(self.participant_ids),
            "studentId": self.student_id,
            "alumniId": self.alumni_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "lastMessageAt": self.last_message_at.isoformat() if self.last_message_at else None,
            "lastMessageText": self.last_message_text,
            "lastMessageSenderId": self.last_message_sender_id,
        }


class ChatMessageModel(Document):
    """Model for individual messages in a chat."""

    chat = ReferenceField(
        ChatSessionModel,
        required=True,
        reverse_delete_rule=CASCADE,
        db_field="chatId"
    )
    sender_id = StringField(required=True, db_field="senderId")
    sender_name = StringField(db_field="senderName")
    sender_avatar = StringField(db_field="senderAvatar")
    text = StringField(required=True, db_field="text")
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "chatMessages",
        "indexes": [
            ("chat", "-created_at")
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "chatId": str(self.chat.id) if self.chat else None,
            "senderId": self.sender_id,
            "senderName": self.sender_name,
            "senderAvatar": self.sender_avatar,
            "text": self.text,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
