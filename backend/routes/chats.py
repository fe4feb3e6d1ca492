"""
Direct chat routes between a student and an alumni.
"""

from flask import Blueprint, request, jsonify
from backend.middlewares.decorators import login_required, current_context
from backend.services import chat_service
from backend.utils.errors import PermissionDeniedError, ValidationError
from backend.utils.notifications import get_notification_center
import logging

logger = logging.getLogger(__name__)

chats_bp = Blueprint('chats', __name__, url_prefix='/api/chats')


def _get_participating_chat(chat_id: str):
    chat = chat_service.get_chat(chat_id)
    if current_context().user_id not in chat.participant_ids:
        raise PermissionDeniedError("You are not a participant in this chat")
    return chat


@chats_bp.route('', methods=['POST'])
@login_required
def get_or_create_chat():
    """
    Open the chat with another user, creating it on first contact.

    Request Body:
        otherUserId: str - The other participant

    Returns:
        200: The chat session
    """
    ctx = current_context()
    data = request.get_json(silent=True) or {}
    other_id = data.get('otherUserId')
    if not other_id:
        raise ValidationError("otherUserId is required")
    if other_id == ctx.user_id:
        raise ValidationError("Cannot start a chat with yourself")

    if ctx.role == "alumni":
        chat = chat_service.get_or_create_chat(other_id, ctx.user_id)
    else:
        chat = chat_service.get_or_create_chat(ctx.user_id, other_id)

    return jsonify({"chat": chat.to_dict()}), 200


@chats_bp.route('', methods=['GET'])
@login_required
def list_my_chats():
    chats = chat_service.list_user_chats(current_context().user_id)
    return jsonify({"chats": [chat.to_dict() for chat in chats]}), 200


@chats_bp.route('/<chat_id>', methods=['GET'])
@login_required
def get_chat(chat_id):
    chat = _get_participating_chat(chat_id)
    return jsonify({"chat": chat.to_dict()}), 200


@chats_bp.route('/<chat_id>/messages', methods=['GET'])
@login_required
def get_messages(chat_id):
    """
    Latest messages of a chat, oldest first.

    Query Parameters:
        count: int - Number of messages (default: 50, max: 200)
    """
    _get_participating_chat(chat_id)
    count = min(request.args.get('count', chat_service.DEFAULT_MESSAGE_COUNT, type=int), 200)
    messages = chat_service.get_messages(chat_id, count=count)
    return jsonify({"messages": [m.to_dict() for m in messages]}), 200


@chats_bp.route('/<chat_id>/messages', methods=['POST'])
@login_required
def send_message(chat_id):
    """
    Send a message.

    Request Body:
        text: str - Non-blank message text

    Returns:
        201: Message stored
        400: Blank text
        403: Not a participant
    """
    ctx = current_context()
    data = request.get_json(silent=True) or {}
    message = chat_service.send_message(ctx, chat_id, data.get('text'))

    chat = chat_service.get_chat(chat_id)
    for participant_id in chat.participant_ids:
        if participant_id != ctx.user_id:
            get_notification_center(participant_id).add(
                "new_message",
                f"{message.sender_name}: {message.text}",
                chat_id=chat_id,
            )

    return jsonify({"message": message.to_dict()}), 201
