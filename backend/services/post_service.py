"""
Service for alumni posts, likes and post comments.
"""

import logging
from typing import List, Optional

from backend.models import PostModel, PostCommentModel
from backend.services import profile_service
from backend.utils.documents import get_or_404, utcnow
from backend.utils.errors import NotFoundError, PermissionDeniedError, ValidationError
from backend.utils.post_validator import (
    URL_FIELDS, normalize_tags, sanitize_html, validate_post_data
)
from backend.utils.session_context import SessionContext
from backend.utils.validators import validate_comment

logger = logging.getLogger(__name__)

# camelCase request key -> document attribute
EDITABLE_FIELDS = {
    "title": "title",
    "content": "content",
    "category": "category",
    "imageUrl": "image_url",
    "videoUrl": "video_url",
    "externalLinkUrl": "external_link_url",
    "externalLinkText": "external_link_text",
}


def _apply_fields(post: PostModel, data: dict) -> None:
    for key, attr in EDITABLE_FIELDS.items():
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, str):
            value = value.strip()
        if key == "content":
            value = sanitize_html(value)
        elif key in URL_FIELDS or key == "externalLinkText":
            value = value or None
        setattr(post, attr, value)

    if "tags" in data:
        post.tags = normalize_tags(data["tags"])


def create_post(ctx: SessionContext, data: dict) -> PostModel:
    """
    Create a post authored by the acting alumni.

    Args:
        ctx: The author; must have the alumni role
        data: camelCase post fields (title, content, category, tags, media URLs)

    Returns:
        The stored post
    """
    ctx.require_user()
    ctx.require_role("alumni")

    is_valid, error = validate_post_data(data)
    if not is_valid:
        raise ValidationError(error)

    now = utcnow()
    post = PostModel(
        author_id=ctx.user_id,
        author_name=ctx.display_name,
        author_avatar=ctx.avatar_url,
        likes_count=0,
        liked_by=[],
        comments_count=0,
        created_at=now,
        updated_at=now,
    )
    _apply_fields(post, data)

    try:
        post.save()
    except Exception as e:
        logger.error(f"Error creating post: {str(e)}")
        raise

    logger.info(f"Post created: {post.id} by user {ctx.user_id}")
    return post


def get_post(post_id: str) -> PostModel:
    return get_or_404(PostModel, post_id, "Post")


def list_posts(
    limit: Optional[int] = None,
    tag: Optional[str] = None,
    category: Optional[str] = None,
) -> List[PostModel]:
    """
    List posts, newest first.

    Args:
        limit: Maximum number of posts
        tag: Only posts carrying this tag
        category: Only posts in this category
    """
    query = {}
    if tag:
        query["tags"] = tag.strip()
    if category:
        query["category"] = category.strip()

    posts = PostModel.objects(**query).order_by("-created_at")
    if limit:
        posts = posts.limit(limit)
    return list(posts)


def list_posts_by_author(author_id: str) -> List[PostModel]:
    if not author_id:
        return []
    return list(PostModel.objects(author_id=author_id).order_by("-created_at"))


def update_post(ctx: SessionContext, post_id: str, data: dict) -> PostModel:
    """
    Update a post. Only the author can update; fields not sent are kept.
    """
    post = get_post(post_id)
    if post.author_id != ctx.user_id:
        raise PermissionDeniedError("Not authorized to update this post")

    is_valid, error = validate_post_data(data, partial=True)
    if not is_valid:
        raise ValidationError(error)

    _apply_fields(post, data)
    post.updated_at = utcnow()

    try:
        post.save()
    except Exception as e:
        logger.error(f"Error updating post {post_id}: {str(e)}")
        raise

    logger.info(f"Post updated: {post_id} by user {ctx.user_id}")
    return post


def delete_post(ctx: SessionContext, post_id: str) -> None:
    """Delete a post and its comments. Only the author can delete."""
    post = get_post(post_id)
    if post.author_id != ctx.user_id:
        raise PermissionDeniedError("Not authorized to delete this post")

    try:
        post.delete()
    except Exception as e:
        logger.error(f"Error deleting post {post_id}: {str(e)}")
        raise

    logger.info(f"Post deleted: {post_id} by user {ctx.user_id}")


def toggle_like(post_id: str, user_id: str) -> PostModel:
    """
    Like the post if the user has not liked it yet, otherwise unlike it.

    Both branches are single conditional updates, so a concurrent toggle by
    the same user cannot push the count out of step with likedBy.

    Returns:
        The post as stored after the toggle
    """
    if not user_id:
        raise ValidationError("User ID is required")

    post = get_post(post_id)

    if post.is_liked_by(user_id):
        updated = PostModel.objects(id=post.id, liked_by=user_id).update_one(
            pull__liked_by=user_id, dec__likes_count=1
        )
    else:
        updated = PostModel.objects(id=post.id, liked_by__ne=user_id).update_one(
            add_to_set__liked_by=user_id, inc__likes_count=1
        )

    if not updated:
        logger.warning(f"Like toggle on post {post_id} by {user_id} lost a race, state unchanged")

    # Never below zero
    PostModel.objects(id=post.id, likes_count__lt=0).update_one(set__likes_count=0)

    post.reload()
    logger.info(
        f"Post {post_id} {'liked' if post.is_liked_by(user_id) else 'unliked'} by user {user_id}"
    )
    return post


def add_comment(ctx: SessionContext, post_id: str, content: str) -> PostCommentModel:
    """
    Add a comment and bump the post's comment counter.

    The comment insert and the counter increment are separate writes; if the
    second fails the counter lags behind the real number of comments.
    """
    ctx.require_user()
    is_valid, error = validate_comment(content)
    if not is_valid:
        raise ValidationError(error)

    post = get_post(post_id)
    author = profile_service.get_profile(ctx.user_id)

    comment = PostCommentModel(
        post=post,
        author_id=ctx.user_id,
        author_name=(author.name if author and author.name else ctx.display_name),
        author_avatar=author.avatar_url if author else ctx.avatar_url,
        author_role=author.role if author else ctx.role,
        content=content.strip(),
        created_at=utcnow(),
    )

    try:
        comment.save()
        PostModel.objects(id=post.id).update_one(inc__comments_count=1)
    except Exception as e:
        logger.error(f"Error adding comment to post {post_id}: {str(e)}")
        raise

    return comment


def list_comments(post_id: str) -> List[PostCommentModel]:
    """Comments on a post, newest first. Unknown post -> empty list."""
    if not post_id:
        return []
    try:
        post = get_post(post_id)
    except NotFoundError as e:
        logger.warning(f"Comments requested for unknown post {post_id}: {str(e)}")
        return []
    return list(PostCommentModel.objects(post=post).order_by("-created_at"))


def get_post_categories() -> List[str]:
    """Distinct post categories, sorted; empty list when the store is unavailable."""
    try:
        return sorted(c for c in PostModel.objects.distinct("category") if c)
    except Exception as e:
        logger.error(f"Error fetching post categories: {str(e)}")
        return []
