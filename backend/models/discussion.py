"""
Discussion thread and comment models.
"""

from mongoengine import (
    Document, StringField, DateTimeField, IntField, ReferenceField, CASCADE
)
from datetime import datetime, timezone


class DiscussionThreadModel(Document):
    """Discussion thread opened by an alumni member."""

    title = StringField(required=True, db_field="title")
    content = StringField(required=True, db_field="content")
    created_by = StringField(required=True, db_field="createdBy")
    creator_name = StringField(db_field="creatorName")
    creator_avatar = StringField(db_field="creatorAvatar")
    creator_role = StringField(db_field="creatorRole")
    comments_count = IntField(default=0, db_field="commentsCount")
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")
    last_activity_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="lastActivityAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "discussionThreads",
        "indexes": [
            "created_by",
            "-last_activity_at"
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "content": self.content,
            "createdBy": self.created_by,
            "creatorName": self.creator_name,
            "creatorAvatar": self.creator_avatar,
            "creatorRole": self.creator_role,
            "commentsCount": self.comments_count,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "lastActivityAt": self.last_activity_at.isoformat() if self.last_activity_at else None,
        }


class ThreadCommentModel(Document):
    """Comment inside a discussion thread; removed together with the thread."""

    thread = ReferenceField(
        DiscussionThreadModel,
        required=True,
        reverse_delete_rule=CASCADE,
        db_field="threadId"
    )
    author_id = StringField(required=True, db_field="authorId")
    author_name = StringField(db_field="authorName")
    author_avatar = StringField(db_field="authorAvatar")
    author_role = StringField(db_field="authorRole")
    content = StringField(required=True, db_field="content")
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "threadComments",
        "indexes": [
            "thread",
            "-created_at"
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "threadId": str(self.thread.id) if self.thread else None,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "authorAvatar": self.author_avatar,
            "authorRole": self.author_role,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
