"""
Posts routes for alumni opportunities, guidance and success stories.
Handles CRUD operations, likes and comments.
"""

from flask import Blueprint, request, jsonify
from backend.middlewares.decorators import login_required, role_required, current_context
from backend.services import post_service
import logging

logger = logging.getLogger(__name__)

# Create posts blueprint
posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')


@posts_bp.route('', methods=['POST'])
@role_required('alumni')
def create_post():
    """
    Create a new post. Alumni only.

    Request Body:
        title: str - Post title (5-100 characters)
        content: str - Main content (10-5000 characters)
        category: str - e.g. "Job Opening", "Guidance"
        tags: list | str - Tags (list or comma-separated)
        imageUrl, videoUrl, externalLinkUrl: str - Optional http(s) URLs
        externalLinkText: str - Optional link label

    Returns:
        201: Post created successfully
        400: Validation error
        403: Not an alumni
    """
    data = request.get_json(silent=True) or {}
    post = post_service.create_post(current_context(), data)

    return jsonify({
        "message": "Post created successfully",
        "post": post.to_dict()
    }), 201


@posts_bp.route('', methods=['GET'])
@login_required
def list_posts():
    """
    List posts, newest first.

    Query Parameters:
        tag: str - Filter by tag
        category: str - Filter by category
        author: str - Filter by author user ID
        limit: int - Maximum number of posts

    Returns:
        200: List of posts
    """
    viewer_id = current_context().user_id
    author_id = request.args.get('author')

    if author_id:
        posts = post_service.list_posts_by_author(author_id)
    else:
        limit = request.args.get('limit', type=int)
        posts = post_service.list_posts(
            limit=limit,
            tag=request.args.get('tag'),
            category=request.args.get('category'),
        )

    return jsonify({
        "posts": [post.to_dict(viewer_id=viewer_id) for post in posts]
    }), 200


@posts_bp.route('/categories', methods=['GET'])
@login_required
def list_categories():
    return jsonify({"categories": post_service.get_post_categories()}), 200


@posts_bp.route('/<post_id>', methods=['GET'])
@login_required
def get_post(post_id):
    """
    Get a single post by ID.

    Returns:
        200: Post data
        404: Post not found
    """
    post = post_service.get_post(post_id)
    return jsonify({"post": post.to_dict(viewer_id=current_context().user_id)}), 200


@posts_bp.route('/<post_id>', methods=['PUT'])
@login_required
def update_post(post_id):
    """
    Update a post. Only the author can update.

    Request Body:
        Same as create_post (all fields optional)

    Returns:
        200: Post updated successfully
        403: Not authorized
        404: Post not found
    """
    data = request.get_json(silent=True) or {}
    post = post_service.update_post(current_context(), post_id, data)

    return jsonify({
        "message": "Post updated successfully",
        "post": post.to_dict()
    }), 200


@posts_bp.route('/<post_id>', methods=['DELETE'])
@login_required
def delete_post(post_id):
    """
    Delete a post and its comments. Only the author can delete.

    Returns:
        200: Post deleted successfully
        403: Not authorized
        404: Post not found
    """
    post_service.delete_post(current_context(), post_id)
    return jsonify({"message": "Post deleted successfully"}), 200


@posts_bp.route('/<post_id>/like', methods=['POST'])
@login_required
def toggle_like(post_id):
    """
    Toggle like on a post.

    Returns:
        200: Like toggled successfully
        404: Post not found
    """
    user_id = current_context().user_id
    post = post_service.toggle_like(post_id, user_id)

    return jsonify({
        "message": "Like toggled successfully",
        "likesCount": post.likes_count,
        "isLiked": post.is_liked_by(user_id)
    }), 200


@posts_bp.route('/<post_id>/comments', methods=['GET'])
@login_required
def list_comments(post_id):
    comments = post_service.list_comments(post_id)
    return jsonify({"comments": [c.to_dict() for c in comments]}), 200


@posts_bp.route('/<post_id>/comments', methods=['POST'])
@login_required
def add_comment(post_id):
    """
    Comment on a post.

    Request Body:
        content: str - 1-1000 characters

    Returns:
        201: Comment added
        400: Empty or too long comment
        404: Post not found
    """
    data = request.get_json(silent=True) or {}
    comment = post_service.add_comment(current_context(), post_id, data.get('content'))

    return jsonify({
        "message": "Comment added",
        "comment": comment.to_dict()
    }), 201
