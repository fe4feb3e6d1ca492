"""
Service for alumni discussion threads and their comments.
"""

import logging
from typing import List, Optional

from backend.models import DiscussionThreadModel, ThreadCommentModel
from backend.services import profile_service
from backend.utils.documents import get_or_404, utcnow
from backend.utils.errors import NotFoundError, PermissionDeniedError, ValidationError
from backend.utils.post_validator import validate_title
from backend.utils.session_context import SessionContext
from backend.utils.validators import validate_comment, validate_thread_content

logger = logging.getLogger(__name__)


def create_thread(ctx: SessionContext, title: str, content: str) -> DiscussionThreadModel:
    """
    Open a discussion thread. Alumni only.

    Args:
        ctx: The creator
        title: 5-100 characters
        content: 1-2000 characters

    Returns:
        The stored thread
    """
    ctx.require_user()
    ctx.require_role("alumni")

    is_valid, error = validate_title(title)
    if not is_valid:
        raise ValidationError(error)
    is_valid, error = validate_thread_content(content)
    if not is_valid:
        raise ValidationError(error)

    now = utcnow()
    thread = DiscussionThreadModel(
        title=title.strip(),
        content=content.strip(),
        created_by=ctx.user_id,
        creator_name=ctx.display_name,
        creator_avatar=ctx.avatar_url,
        creator_role=ctx.role,
        comments_count=0,
        created_at=now,
        last_activity_at=now,
    )

    try:
        thread.save()
    except Exception as e:
        logger.error(f"Error creating discussion thread: {str(e)}")
        raise

    logger.info(f"Thread created: {thread.id} by user {ctx.user_id}")
    return thread


def get_thread(thread_id: str) -> DiscussionThreadModel:
    return get_or_404(DiscussionThreadModel, thread_id, "Thread")


def list_threads(limit: Optional[int] = None) -> List[DiscussionThreadModel]:
    """Threads with the most recent activity first."""
    threads = DiscussionThreadModel.objects.order_by("-last_activity_at")
    if limit:
        threads = threads.limit(limit)
    return list(threads)


def add_comment(ctx: SessionContext, thread_id: str, content: str) -> ThreadCommentModel:
    """
    Comment on a thread, then bump its counter and activity time.
    Two separate writes; the counter can lag if the second one fails.
    """
    ctx.require_user()
    is_valid, error = validate_comment(content)
    if not is_valid:
        raise ValidationError(error)

    thread = get_thread(thread_id)
    author = profile_service.get_profile(ctx.user_id)
    now = utcnow()

    comment = ThreadCommentModel(
        thread=thread,
        author_id=ctx.user_id,
        author_name=(author.name if author and author.name else ctx.display_name),
        author_avatar=author.avatar_url if author else ctx.avatar_url,
        author_role=author.role if author else ctx.role,
        content=content.strip(),
        created_at=now,
    )

    try:
        comment.save()
        DiscussionThreadModel.objects(id=thread.id).update_one(
            inc__comments_count=1, set__last_activity_at=now
        )
    except Exception as e:
        logger.error(f"Error adding comment to thread {thread_id}: {str(e)}")
        raise

    return comment


def list_comments(thread_id: str) -> List[ThreadCommentModel]:
    if not thread_id:
        return []
    try:
        thread = get_thread(thread_id)
    except NotFoundError as e:
        logger.warning(f"Comments requested for unknown thread {thread_id}: {str(e)}")
        return []
    return list(ThreadCommentModel.objects(thread=thread).order_by("-created_at"))


def delete_thread(ctx: SessionContext, thread_id: str) -> None:
    """Delete a thread with its comments. Only the creator can delete."""
    thread = get_thread(thread_id)
    if thread.created_by != ctx.user_id:
        raise PermissionDeniedError("Not authorized to delete this thread")

    try:
        thread.delete()
    except Exception as e:
        logger.error(f"Error deleting thread {thread_id}: {str(e)}")
        raise

    logger.info(f"Thread deleted: {thread_id} by user {ctx.user_id}")


def get_thread_titles(limit: int = 5) -> List[str]:
    """Titles of the most recently active threads; empty list on failure."""
    try:
        return [thread.title for thread in list_threads(limit=limit)]
    except Exception as e:
        logger.error(f"Error fetching discussion titles: {str(e)}")
        return []
