"""
Read-only tools MentorBot can call to ground answers in live platform data.

Each tool returns a list of strings and never raises: the underlying
service helpers return an empty list when the store is unavailable.
"""

from langchain.tools import tool
import logging
from typing import List

from backend.services import discussion_service, post_service, profile_service

logger = logging.getLogger(__name__)

RECENT_DISCUSSIONS_LIMIT = 5


@tool
def list_alumni_industries() -> List[str]:
    """List the distinct industries that alumni on MentorConnect work in."""
    logger.info("[TOOL CALLED] list_alumni_industries")
    return profile_service.get_alumni_industries()


@tool
def list_post_categories() -> List[str]:
    """List the distinct categories of posts (job openings, guidance, success stories...) shared by alumni."""
    logger.info("[TOOL CALLED] list_post_categories")
    return post_service.get_post_categories()


@tool
def list_recent_discussion_titles() -> List[str]:
    """List the titles of the most recently active discussion threads."""
    logger.info("[TOOL CALLED] list_recent_discussion_titles")
    return discussion_service.get_thread_titles(limit=RECENT_DISCUSSIONS_LIMIT)


MENTOR_BOT_TOOLS = [
    list_alumni_industries,
    list_post_categories,
    list_recent_discussion_titles,
]
