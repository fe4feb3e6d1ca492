"""
Post model for alumni-authored opportunities and guidance.
Comments live in their own collection and are deleted with their post.
"""

from mongoengine import (
    Document, StringField, DateTimeField, ListField, IntField,
    ReferenceField, CASCADE
)
from datetime import datetime, timezone


class PostModel(Document):
    """Post model for storing opportunities, guidance and success stories."""

    # Author information (denormalized at write time)
    author_id = StringField(required=True, db_field="authorId")
    author_name = StringField(db_field="authorName")
    author_avatar = StringField(db_field="authorAvatar")

    title = StringField(required=True, min_length=5, max_length=100, db_field="title")
    content = StringField(required=True, db_field="content")
    category = StringField(required=True, db_field="category")
    tags = ListField(StringField(), default=list, db_field="tags")

    # Media and links
    image_url = StringField(db_field="imageUrl")
    video_url = StringField(db_field="videoUrl")
    external_link_url = StringField(db_field="externalLinkUrl")
    external_link_text = StringField(max_length=100, db_field="externalLinkText")

    # Engagement counters
    likes_count = IntField(default=0, db_field="likesCount")
    liked_by = ListField(StringField(), default=list, db_field="likedBy")  # Array of user IDs
    comments_count = IntField(default=0, db_field="commentsCount")

    # Timestamps
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")
    updated_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="updatedAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "posts",
        "indexes": [
            "author_id",
            "tags",
            "category",
            "-created_at",  # Descending index for newest first
        ]
    }

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in (self.liked_by or [])

    def to_dict(self, viewer_id: str = None) -> dict:
        """
        Convert post to dictionary for API responses.

        Args:
            viewer_id: Optional user id, used to report whether the viewer liked the post

        Returns:
            Dictionary representation of post
        """
        data = {
            "id": str(self.id),
            "authorId": self.author_id,
            "authorName": self.author_name,
            "authorAvatar": self.author_avatar,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
            "imageUrl": self.image_url,
            "videoUrl": self.video_url,
            "externalLinkUrl": self.external_link_url,
            "externalLinkText": self.external_link_text,
            "likesCount": self.likes_count,
            "likedBy": list(self.liked_by),
            "commentsCount": self.comments_count,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if viewer_id:
            data["isLiked"] = self.is_liked_by(viewer_id)
        return data


class PostCommentModel(Document):
    """Comment on a post."""

    post = ReferenceField(
        PostModel,
        required=True,
        reverse_delete_rule=CASCADE,
        db_field="postId"
    )
    author_id = StringField(required=True, db_field="authorId")
    author_name = StringField(db_field="authorName")
    author_avatar = StringField(db_field="authorAvatar")
    author_role = StringField(db_field="authorRole")
    content = StringField(required=True, db_field="content")
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "postComments",
        "indexes": [
            "post",
            "-created_at"
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "postId": str(self.post.id) if self.post else None,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "authorAvatar": self.author_avatar,
            "authorRole": self.author_role,
            "content": self.content,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
