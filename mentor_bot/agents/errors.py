"""
User-facing messages for chatbot failures.
"""

import logging

from mentor_bot.agents.response_parser import ResponseFormatError

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 300

UNAVAILABLE_MESSAGE = (
    "MentorBot is temporarily unavailable because the AI service is overloaded. "
    "Please try again in a few moments."
)
MISCONFIGURED_MESSAGE = (
    "MentorBot is not configured correctly (the AI service rejected its credentials). "
    "Please contact the platform administrators."
)
FORMAT_MESSAGE = (
    "MentorBot received an answer it could not read. Please rephrase your question and try again."
)
GENERIC_MESSAGE = (
    "Sorry, I encountered an error trying to answer your question. Please try again later."
)

UNAVAILABLE_MARKERS = ("503", "429", "overloaded", "unavailable", "resource exhausted", "resource_exhausted", "rate limit", "quota")
MISCONFIGURED_MARKERS = ("api key", "api_key", "permission denied", "unauthenticated", "401", "403", "invalid credentials")


def _cap(message: str) -> str:
    if len(message) <= MAX_MESSAGE_LENGTH:
        return message
    return message[:MAX_MESSAGE_LENGTH - 3] + "..."


def classify_error(error: Exception) -> str:
    """
    Name the failure category.

    Returns:
        "format", "unavailable", "misconfigured" or "generic"
    """
    if isinstance(error, ResponseFormatError):
        return "format"

    text = f"{type(error).__name__} {error}".lower()
    if any(marker in text for marker in UNAVAILABLE_MARKERS):
        return "unavailable"
    if any(marker in text for marker in MISCONFIGURED_MARKERS):
        return "misconfigured"
    return "generic"


def user_message_for(error: Exception) -> str:
    """Map a chatbot failure to a human-readable message (at most 300 characters)."""
    category = classify_error(error)
    logger.error(f"Chatbot failure ({category}): {str(error)}")

    message = {
        "format": FORMAT_MESSAGE,
        "unavailable": UNAVAILABLE_MESSAGE,
        "misconfigured": MISCONFIGURED_MESSAGE,
    }.get(category, GENERIC_MESSAGE)
    return _cap(message)
