"""
Notification routes for the signed-in user's in-memory notification list.
"""

from flask import Blueprint, jsonify
from backend.middlewares.decorators import login_required, current_context
from backend.utils.errors import NotFoundError
from backend.utils.notifications import get_notification_center

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/notifications')


@notifications_bp.route('', methods=['GET'])
@login_required
def list_notifications():
    center = get_notification_center(current_context().user_id)
    return jsonify(center.to_dict()), 200


@notifications_bp.route('/<notification_id>/read', methods=['POST'])
@login_required
def mark_read(notification_id):
    center = get_notification_center(current_context().user_id)
    if not any(n.id == notification_id for n in center.notifications):
        raise NotFoundError("Notification not found")
    center.mark_read(notification_id)
    return jsonify(center.to_dict()), 200


@notifications_bp.route('/read-all', methods=['POST'])
@login_required
def mark_all_read():
    center = get_notification_center(current_context().user_id)
    center.mark_all_read()
    return jsonify(center.to_dict()), 200


@notifications_bp.route('', methods=['DELETE'])
@login_required
def clear_notifications():
    center = get_notification_center(current_context().user_id)
    center.clear()
    return jsonify(center.to_dict()), 200
