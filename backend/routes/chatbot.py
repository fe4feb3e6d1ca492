"""
Chatbot routes for MentorBot.
Provides the FAQ endpoint and smart alumni recommendations.
"""

from flask import Blueprint, request, jsonify
from backend.middlewares.decorators import login_required, role_required, current_context
from backend.services import profile_service
from mentor_bot.agents import (
    answer_faq, get_smart_alumni_recommendations, serialize_alumni_profiles,
    match_recommended_alumni
)
import logging

logger = logging.getLogger(__name__)

# Create blueprint
chatbot_bp = Blueprint("chatbot", __name__, url_prefix="/api/chatbot")

# Global references (will be set by init_chatbot)
_FAQ_AGENT = None
_LLM = None

UNAVAILABLE_RESPONSE = "Chatbot is not available. Please try again later."


def init_chatbot(agent, llm):
    """
    Initialize chatbot components.
    Called from create_app after the agent is built.

    Args:
        agent: The MentorBot FAQ agent
        llm: Chat model used by the recommendation chain
    """
    global _FAQ_AGENT, _LLM
    _FAQ_AGENT = agent
    _LLM = llm
    logger.info("Chatbot routes initialized with chatbot components")


def get_thread_id(user_id: str) -> str:
    """Conversation id for the agent's memory."""
    return f"flask_{user_id}"


@chatbot_bp.route("/health", methods=["GET"])
def health_check():
    """
    Health check endpoint for chatbot service.
    """
    return jsonify(
        {
            "status": "healthy",
            "agent_ready": _FAQ_AGENT is not None,
            "llm_ready": _LLM is not None,
        }
    ), 200


@chatbot_bp.route("/ask", methods=["POST"])
@login_required
def ask():
    """
    Ask MentorBot a question about the platform.

    Request body:
        {
            "question": "How do I send a mentorship request?"
        }

    Response:
        {
            "answer": "..."
        }
    """
    if _FAQ_AGENT is None:
        return jsonify({"message": UNAVAILABLE_RESPONSE}), 503

    data = request.get_json(silent=True) or {}
    result = answer_faq(
        _FAQ_AGENT,
        data.get("question"),
        thread_id=get_thread_id(current_context().user_id),
    )
    return jsonify(result.model_dump()), 200


@chatbot_bp.route("/recommendations", methods=["GET"])
@role_required("student")
def recommendations():
    """
    Alumni recommended for the signed-in student.

    Response:
        {
            "recommendedAlumni": "Name A, Name B",
            "alumni": [ profile, ... ]  (at most 3 matching profiles)
        }
    """
    if _LLM is None:
        return jsonify({"message": UNAVAILABLE_RESPONSE}), 503

    student = profile_service.get_profile(current_context().user_id)
    details = student.student_profile
    alumni = profile_service.get_profiles_by_role("alumni")
    if not alumni:
        return jsonify({"recommendedAlumni": "", "alumni": []}), 200

    output = get_smart_alumni_recommendations(
        _LLM,
        student_interests=", ".join(details.academic_interests) if details else "",
        student_goals=details.goals if details else "",
        student_academic_info=(
            f"College: {details.college}, Year: {details.year}" if details else ""
        ),
        alumni_profiles=serialize_alumni_profiles(alumni),
    )

    matched = match_recommended_alumni(output["recommendedAlumni"], alumni)
    return jsonify({
        "recommendedAlumni": output["recommendedAlumni"],
        "alumni": [profile.to_dict() for profile in matched],
    }), 200
