"""
Profile routes: own profile, public profiles and the alumni directory.
"""

import logging
from flask import Blueprint, request, jsonify

from backend.middlewares.decorators import login_required, current_context
from backend.services import profile_service
from backend.utils.errors import NotFoundError

logger = logging.getLogger(__name__)

profiles_bp = Blueprint('profiles', __name__, url_prefix='/api/profiles')


@profiles_bp.route('/me', methods=['GET'])
@login_required
def get_my_profile():
    profile = profile_service.get_profile(current_context().user_id)
    return jsonify({"profile": profile.to_dict()}), 200


@profiles_bp.route('/me', methods=['PUT'])
@login_required
def update_my_profile():
    """
    Update (merge) the signed-in user's profile.

    Request Body:
        name, avatarUrl: str (optional)
        studentProfile: dict (students only)
        alumniProfile: dict (alumni only)

    Returns:
        200: Profile updated
        400: Validation error
    """
    data = request.get_json(silent=True) or {}
    data.pop('email', None)
    data.pop('role', None)
    profile = profile_service.set_profile(current_context().user_id, data)

    logger.info(f"Profile updated: {profile.id}")
    return jsonify({
        "message": "Profile updated successfully",
        "profile": profile.to_dict(),
    }), 200


@profiles_bp.route('/alumni', methods=['GET'])
@login_required
def alumni_directory():
    """
    Alumni directory with filters.

    Query Parameters:
        search: str - Substring of name or email
        skills: str - Comma-separated skills; all must match
        industry: str - Exact industry (case-insensitive)
        company: str - Substring of company

    Returns:
        200: Matching alumni plus the skill and industry facets of all alumni
    """
    alumni = profile_service.get_profiles_by_role('alumni')
    skills = [s.strip() for s in request.args.get('skills', '').split(',') if s.strip()]

    matches = profile_service.filter_alumni(
        alumni,
        search_term=request.args.get('search', ''),
        skills=skills,
        industry=request.args.get('industry', ''),
        company=request.args.get('company', ''),
    )

    return jsonify({
        "alumni": [profile.to_dict() for profile in matches],
        "availableSkills": profile_service.available_skills(alumni),
        "availableIndustries": profile_service.available_industries(alumni),
    }), 200


@profiles_bp.route('/<user_id>', methods=['GET'])
@login_required
def get_profile(user_id):
    profile = profile_service.get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return jsonify({"profile": profile.to_dict()}), 200
