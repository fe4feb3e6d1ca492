"""
Upload routes for file handling.
Provides the image upload endpoint used by posts and profile avatars.
"""

from flask import Blueprint, request, jsonify, current_app
from backend.middlewares.decorators import login_required
from backend.utils.image_upload import upload_image, MAX_FILE_SIZE, ALLOWED_MIME_TYPES
import logging

logger = logging.getLogger(__name__)

# Create blueprint
upload_bp = Blueprint('upload', __name__, url_prefix='/api/upload')


@upload_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint for upload service."""
    return jsonify({
        "status": "healthy",
        "max_file_size": MAX_FILE_SIZE,
        "allowed_types": sorted(ALLOWED_MIME_TYPES)
    }), 200


@upload_bp.route('/image', methods=['POST'])
@login_required
def upload_image_route():
    """
    Upload an image file.

    Request:
        - Method: POST
        - Content-Type: multipart/form-data
        - Field name: 'file' (required)

    Response:
        {
            "url": "https://api.example.com/uploads/photo_1a2b.jpg",
            "public_id": "mentorconnect/photo_1a2b"
        }

    Error Response:
        {
            "error": "Error message"
        }
    """
    result = upload_image(
        request.files.get('file'),
        current_app.config.get('UPLOAD_FOLDER'),
        current_app.config.get('PUBLIC_BASE_URL'),
    )
    if not result.ok:
        return jsonify(result.to_dict()), 400
    return jsonify(result.to_dict()), 201
