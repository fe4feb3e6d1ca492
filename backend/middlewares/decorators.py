"""
Authentication middleware decorators.
"""

from functools import wraps
from flask import g, session, jsonify

from backend.services import profile_service
from backend.utils.session_context import SessionContext


def current_context() -> SessionContext:
    """
    SessionContext for the signed-in user of this request.
    Resolved once per request from the profile stored under session['user_id'].
    """
    if "session_context" in g:
        return g.session_context

    user_id = session.get("user_id")
    profile = profile_service.get_profile(user_id) if user_id else None
    ctx = SessionContext.from_profile(profile) if profile else SessionContext(user_id=None)
    g.session_context = ctx
    return ctx


def login_required(f):
    """
    Decorator to require authentication for a route.
    Returns 401 if user is not logged in or the profile no longer exists.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session or not current_context().user_id:
            return jsonify({"message": "Authentication required"}), 401
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    """
    Decorator to require one of the given roles.
    Returns 401 if not logged in, 403 if the role does not match.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if "user_id" not in session or not current_context().user_id:
                return jsonify({"message": "Authentication required"}), 401
            if current_context().role not in roles:
                return jsonify({"message": f"Only {' or '.join(roles)} users can do this"}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator
