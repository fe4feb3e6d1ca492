"""
Service for managing mentorship requests.

Requests start pending and are answered by the addressed alumni with one of
accepted, rejected or messaged. respondedAt is stamped on every answer.
"""

import logging
from typing import List, Optional

from backend.models import MentorshipRequestModel
from backend.services import chat_service, profile_service
from backend.utils.documents import get_or_404, utcnow
from backend.utils.errors import NotFoundError, PermissionDeniedError, ValidationError
from backend.utils.session_context import SessionContext

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = ("accepted", "rejected", "messaged")


def create_mentorship_request(
    ctx: SessionContext,
    alumni_id: str,
    message: str,
    student_goals: Optional[str] = None,
) -> MentorshipRequestModel:
    """
    Create a pending mentorship request from the acting student.

    Args:
        ctx: The requesting student
        alumni_id: Profile id of the alumni being asked
        message: The student's note to the alumni
        student_goals: Snapshot of the student's goals, shown to the alumni

    Returns:
        The stored request
    """
    if not ctx.user_id or not alumni_id:
        raise ValidationError("Both student ID and alumni ID are required")
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Message is required")

    alumni = profile_service.get_profile(alumni_id)
    if alumni is None or alumni.role != "alumni":
        raise NotFoundError("Alumni not found")

    if student_goals is None:
        student = profile_service.get_profile(ctx.user_id)
        if student is not None and student.student_profile is not None:
            student_goals = student.student_profile.goals or None

    request = MentorshipRequestModel(
        student_id=ctx.user_id,
        student_name=ctx.display_name,
        student_avatar=ctx.avatar_url,
        student_goals=student_goals,
        alumni_id=alumni_id,
        alumni_name=alumni.name or "Alumni",
        alumni_avatar=alumni.avatar_url,
        message=message.strip(),
        status="pending",
        requested_at=utcnow(),
    )

    try:
        request.save()
    except Exception as e:
        logger.error(f"Error creating mentorship request: {str(e)}")
        raise

    logger.info(f"Mentorship request {request.id} created: {ctx.user_id} -> {alumni_id}")
    return request


def update_status(
    ctx: SessionContext,
    request_id: str,
    new_status: str,
    message: Optional[str] = None,
) -> MentorshipRequestModel:
    """
    Answer a mentorship request.

    Args:
        ctx: The alumni the request was addressed to
        request_id: Request id
        new_status: accepted, rejected or messaged
        message: For messaged, the alumni's reply; for accepted, the chat id

    Returns:
        The updated request
    """
    if new_status not in RESPONSE_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(RESPONSE_STATUSES)}")

    request = get_or_404(MentorshipRequestModel, request_id, "Request")

    if request.alumni_id != ctx.user_id:
        raise PermissionDeniedError("Only the requested alumni can respond to this request")

    if request.status != "pending":
        # Re-answering is allowed; kept visible until the product rule is settled.
        logger.warning(
            f"Request {request_id} moved from {request.status} to {new_status}"
        )

    if message is not None and not isinstance(message, str):
        raise ValidationError("Message must be text")

    updates = {"set__status": new_status, "set__responded_at": utcnow()}
    if new_status == "messaged" and message:
        updates["set__alumni_message"] = message.strip()
    elif new_status == "accepted" and message and message != request.chat_id:
        updates["set__chat_id"] = message

    try:
        MentorshipRequestModel.objects(id=request.id).update_one(**updates)
    except Exception as e:
        logger.error(f"Error updating mentorship request status: {str(e)}")
        raise

    request.reload()
    logger.info(f"Request {request_id} {new_status} by {ctx.user_id}")
    return request


def accept_request(ctx: SessionContext, request_id: str) -> MentorshipRequestModel:
    """Accept a request and attach the student/alumni chat to it."""
    request = get_or_404(MentorshipRequestModel, request_id, "Request")
    if request.alumni_id != ctx.user_id:
        raise PermissionDeniedError("Only the requested alumni can respond to this request")

    chat = chat_service.get_or_create_chat(request.student_id, request.alumni_id)
    return update_status(ctx, request_id, "accepted", str(chat.id))


def list_for_user(user_id: str, role: str) -> List[MentorshipRequestModel]:
    """
    Requests visible to a user, newest first.
    Students see what they sent, alumni what they received.
    """
    if not user_id or not role:
        logger.error("list_for_user: user_id and role are required")
        return []

    if role == "student":
        query = {"student_id": user_id}
    elif role == "alumni":
        query = {"alumni_id": user_id}
    else:
        return []

    try:
        return list(MentorshipRequestModel.objects(**query).order_by("-requested_at"))
    except Exception as e:
        logger.error(f"Error fetching mentorship requests for user {user_id} ({role}): {str(e)}")
        raise


def get_request(request_id: str) -> MentorshipRequestModel:
    return get_or_404(MentorshipRequestModel, request_id, "Request")
