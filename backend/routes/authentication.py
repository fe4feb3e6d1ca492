"""
Authentication routes.
Handles mocked sign-in by email, logout, role selection and session management.
"""

import logging
from flask import Blueprint, request, session, jsonify

from backend.middlewares.decorators import login_required, current_context
from backend.services import profile_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _start_session(profile):
    session.clear()
    session['user_id'] = str(profile.id)
    session['email'] = profile.email
    session['role'] = profile.role
    session.permanent = True


@auth_bp.route('/signin', methods=['POST'])
def sign_in():
    """
    Sign in with an email address (no password; the identity provider is mocked).
    Creates the profile with role "unset" on first sign-in.

    Request Body:
        email: str
        name: str (optional)
        avatarUrl: str (optional)

    Returns:
        200: Signed in, with the profile and whether role selection is needed
        400: Invalid email
    """
    data = request.get_json(silent=True) or {}
    profile = profile_service.find_or_create_by_email(
        data.get('email'), name=data.get('name'), avatar_url=data.get('avatarUrl')
    )
    _start_session(profile)

    logger.info(f"User {profile.id} signed in")
    return jsonify({
        "message": "Login successful",
        "user": profile.to_dict(),
        "needsRoleSelection": profile.role == "unset",
    }), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    session.clear()
    return jsonify({"message": "Logout successful"}), 200


@auth_bp.route('/me', methods=['GET'])
def get_current_user():
    """Get current authenticated user information."""
    if 'user_id' not in session:
        return jsonify({"user": None}), 200

    profile = profile_service.get_profile(session['user_id'])
    if profile is None:
        session.clear()
        return jsonify({"user": None}), 200

    return jsonify({"user": profile.to_dict()}), 200


@auth_bp.route('/role', methods=['POST'])
@login_required
def select_role():
    """
    Select the user's role (student or alumni). Only possible once.

    Request Body:
        role: str

    Returns:
        200: Role selected, with the initialized profile
        400: Invalid role, or a different role was already selected
    """
    data = request.get_json(silent=True) or {}
    profile = profile_service.select_role(current_context(), data.get('role'))
    session['role'] = profile.role

    return jsonify({
        "message": "Role selected successfully",
        "user": profile.to_dict(),
    }), 200
