"""
Service for managing chat sessions and messages.

Participant ids are stored sorted, so any pair of users maps to a single
session regardless of who contacts whom first.
"""

import logging
from typing import List

from mongoengine.errors import NotUniqueError

from backend.models import ChatSessionModel, ChatMessageModel, make_pair_key
from backend.services import profile_service
from backend.utils.documents import get_or_404, utcnow
from backend.utils.errors import PermissionDeniedError, ValidationError
from backend.utils.session_context import SessionContext

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_COUNT = 50


def get_or_create_chat(student_id: str, alumni_id: str) -> ChatSessionModel:
    """
    Get the chat between two users, creating it on first contact.

    Args:
        student_id: One participant (the student side of a mentorship)
        alumni_id: The other participant

    Returns:
        The chat session shared by the pair
    """
    if not student_id or not alumni_id:
        raise ValidationError("Both studentId and alumniId are required.")

    pair_key = make_pair_key(student_id, alumni_id)
    chat = ChatSessionModel.objects(pair_key=pair_key).first()
    if chat:
        return chat

    now = utcnow()
    chat = ChatSessionModel(
        participant_ids=sorted([student_id, alumni_id]),
        pair_key=pair_key,
        student_id=student_id,
        alumni_id=alumni_id,
        created_at=now,
        last_message_at=now,
        last_message_text="Chat created.",
        last_message_sender_id="",
    )
    try:
        chat.save()
    except NotUniqueError:
        # Another request created the session first
        logger.info(f"Chat for pair {pair_key} created concurrently, reusing it")
        return ChatSessionModel.objects(pair_key=pair_key).first()

    logger.info(f"Chat {chat.id} created for pair {pair_key}")
    return chat


def get_chat(chat_id: str) -> ChatSessionModel:
    return get_or_404(ChatSessionModel, chat_id, "Chat")


def send_message(ctx: SessionContext, chat_id: str, text: str) -> ChatMessageModel:
    """
    Append a message to a chat and update the session summary.

    Args:
        ctx: The sender
        chat_id: Target chat
        text: Message body; blank text is rejected

    Returns:
        The stored message
    """
    if not chat_id or not ctx.user_id or not isinstance(text, str) or not text.strip():
        raise ValidationError("Chat ID, Sender ID, and text are required.")

    chat = get_chat(chat_id)
    if ctx.user_id not in chat.participant_ids:
        raise PermissionDeniedError("You are not a participant in this chat")

    sender = profile_service.get_profile(ctx.user_id)
    text = text.strip()
    now = utcnow()

    message = ChatMessageModel(
        chat=chat,
        sender_id=ctx.user_id,
        sender_name=(sender.name if sender and sender.name else ctx.name) or "User",
        sender_avatar=sender.avatar_url if sender else ctx.avatar_url,
        text=text,
        created_at=now,
    )

    try:
        message.save()
        ChatSessionModel.objects(id=chat.id).update_one(
            set__last_message_at=now,
            set__last_message_text=text,
            set__last_message_sender_id=ctx.user_id,
        )
    except Exception as e:
        logger.error(f"Error sending message to chat {chat_id}: {str(e)}")
        raise

    return message


def get_messages(chat_id: str, count: int = DEFAULT_MESSAGE_COUNT) -> List[ChatMessageModel]:
    """
    The most recent `count` messages, oldest first for display.
    """
    if not chat_id or count <= 0:
        return []

    chat = get_chat(chat_id)
    newest_first = list(
        ChatMessageModel.objects(chat=chat).order_by("-created_at").limit(count)
    )
    newest_first.reverse()
    return newest_first


def list_user_chats(user_id: str) -> List[ChatSessionModel]:
    """Chats the user takes part in, most recently active first."""
    if not user_id:
        return []
    return list(
        ChatSessionModel.objects(participant_ids=user_id).order_by("-last_message_at")
    )
