"""
Discussion routes.
Alumni open threads; everyone signed in can read and comment.
"""

from flask import Blueprint, request, jsonify
from backend.middlewares.decorators import login_required, role_required, current_context
from backend.services import discussion_service
import logging

logger = logging.getLogger(__name__)

discussions_bp = Blueprint('discussions', __name__, url_prefix='/api/discussions')


@discussions_bp.route('', methods=['POST'])
@role_required('alumni')
def create_thread():
    """
    Open a discussion thread. Alumni only.

    Request Body:
        title: str - 5-100 characters
        content: str - 1-2000 characters

    Returns:
        201: Thread created
        400: Validation error
    """
    data = request.get_json(silent=True) or {}
    thread = discussion_service.create_thread(
        current_context(), data.get('title'), data.get('content')
    )
    return jsonify({
        "message": "Thread created successfully",
        "thread": thread.to_dict()
    }), 201


@discussions_bp.route('', methods=['GET'])
@login_required
def list_threads():
    """Threads ordered by last activity. Optional ?limit=N."""
    threads = discussion_service.list_threads(limit=request.args.get('limit', type=int))
    return jsonify({"threads": [t.to_dict() for t in threads]}), 200


@discussions_bp.route('/<thread_id>', methods=['GET'])
@login_required
def get_thread(thread_id):
    """Thread with its comments, newest comment first."""
    thread = discussion_service.get_thread(thread_id)
    comments = discussion_service.list_comments(thread_id)
    return jsonify({
        "thread": thread.to_dict(),
        "comments": [c.to_dict() for c in comments]
    }), 200


@discussions_bp.route('/<thread_id>', methods=['DELETE'])
@login_required
def delete_thread(thread_id):
    discussion_service.delete_thread(current_context(), thread_id)
    return jsonify({"message": "Thread deleted successfully"}), 200


@discussions_bp.route('/<thread_id>/comments', methods=['POST'])
@login_required
def add_comment(thread_id):
    """
    Comment on a thread.

    Request Body:
        content: str - 1-1000 characters

    Returns:
        201: Comment added
        400: Empty or too long comment
        404: Thread not found
    """
    data = request.get_json(silent=True) or {}
    comment = discussion_service.add_comment(current_context(), thread_id, data.get('content'))
    return jsonify({
        "message": "Comment added",
        "comment": comment.to_dict()
    }), 201
