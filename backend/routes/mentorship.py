"""
Mentorship request routes.
Students send requests; the addressed alumni answers them.
"""

import logging
from flask import Blueprint, request, jsonify

from backend.middlewares.decorators import login_required, role_required, current_context
from backend.services import mentorship_service
from backend.utils.errors import PermissionDeniedError
from backend.utils.notifications import get_notification_center

logger = logging.getLogger(__name__)

mentorship_bp = Blueprint('mentorship', __name__, url_prefix='/api/mentorship')


@mentorship_bp.route('/requests', methods=['POST'])
@role_required('student')
def create_request():
    """
    Send a mentorship request to an alumni.

    Request Body:
        alumniId: str
        message: str
        studentGoals: str (optional, defaults to the student's profile goals)

    Returns:
        201: Request created
        400: Missing alumni id or blank message
        404: Alumni not found
    """
    data = request.get_json(silent=True) or {}
    mentorship_request = mentorship_service.create_mentorship_request(
        current_context(),
        data.get('alumniId'),
        data.get('message'),
        student_goals=data.get('studentGoals'),
    )
    get_notification_center(mentorship_request.alumni_id).add(
        "mentorship_request",
        f"New mentorship request from {mentorship_request.student_name}",
    )
    return jsonify({
        "message": "Mentorship request sent",
        "request": mentorship_request.to_dict(),
    }), 201


@mentorship_bp.route('/requests', methods=['GET'])
@login_required
def list_my_requests():
    """Requests sent (students) or received (alumni), newest first."""
    ctx = current_context()
    requests = mentorship_service.list_for_user(ctx.user_id, ctx.role)
    return jsonify({"requests": [r.to_dict() for r in requests]}), 200


@mentorship_bp.route('/requests/<request_id>', methods=['GET'])
@login_required
def get_request(request_id):
    ctx = current_context()
    mentorship_request = mentorship_service.get_request(request_id)
    if ctx.user_id not in (mentorship_request.student_id, mentorship_request.alumni_id):
        raise PermissionDeniedError("Not authorized to view this request")
    return jsonify({"request": mentorship_request.to_dict()}), 200


@mentorship_bp.route('/requests/<request_id>/status', methods=['PUT'])
@role_required('alumni')
def update_status(request_id):
    """
    Answer a request.

    Request Body:
        status: accepted | rejected | messaged
        message: str (optional; the reply for messaged)
    """
    data = request.get_json(silent=True) or {}
    mentorship_request = mentorship_service.update_status(
        current_context(), request_id, data.get('status'), data.get('message')
    )
    return jsonify({
        "message": "Request updated",
        "request": mentorship_request.to_dict(),
    }), 200


@mentorship_bp.route('/requests/<request_id>/accept', methods=['POST'])
@role_required('alumni')
def accept_request(request_id):
    """Accept a request and open the chat with the student."""
    mentorship_request = mentorship_service.accept_request(current_context(), request_id)
    return jsonify({
        "message": "Request accepted",
        "request": mentorship_request.to_dict(),
        "chatId": mentorship_request.chat_id,
    }), 200
