"""
Smart alumni recommendations: one prompt, one model call, names passed through.
"""

import logging
from typing import Iterable, List

from langchain_core.output_parsers import StrOutputParser

from mentor_bot.agents.prompts import RECOMMENDATION_PROMPT

logger = logging.getLogger(__name__)

RECOMMENDATION_ERROR = "Error: Could not fetch recommendations from AI."


def serialize_alumni_profiles(profiles: Iterable) -> str:
    """
    Describe alumni profiles for the prompt.

    Args:
        profiles: UserModel documents with the alumni role

    Returns:
        "Name: ..., Industry: ..., Skills: ..." entries separated by "; "
    """
    entries = []
    for profile in profiles:
        details = profile.alumni_profile
        industry = details.industry if details and details.industry else "N/A"
        skills = ", ".join(details.skills) if details and details.skills else "N/A"
        entries.append(f"Name: {profile.name or 'N/A'}, Industry: {industry}, Skills: {skills}")
    return "; ".join(entries)


def get_smart_alumni_recommendations(
    llm,
    student_interests: str,
    student_goals: str,
    student_academic_info: str,
    alumni_profiles: str,
) -> dict:
    """
    Ask the model which alumni suit the student.

    Args:
        llm: Chat model
        student_interests: Comma separated interests
        student_goals: The student's goals
        student_academic_info: e.g. "College: X, Year: 2"
        alumni_profiles: Output of serialize_alumni_profiles

    Returns:
        {"recommendedAlumni": "<comma separated names>"}; an empty string when
        the model returns nothing usable, RECOMMENDATION_ERROR when the call fails
    """
    chain = RECOMMENDATION_PROMPT | llm | StrOutputParser()

    try:
        output = chain.invoke({
            "student_interests": student_interests or "General",
            "student_goals": student_goals or "General career development",
            "student_academic_info": student_academic_info or "N/A",
            "alumni_profiles": alumni_profiles,
        })
    except Exception as e:
        logger.error(f"Error executing alumni recommendation chain: {str(e)}")
        return {"recommendedAlumni": RECOMMENDATION_ERROR}

    if not isinstance(output, str) or not output.strip():
        logger.warning("Alumni recommendation chain returned no usable output")
        return {"recommendedAlumni": ""}

    return {"recommendedAlumni": output.strip()}


def match_recommended_alumni(recommended: str, profiles: Iterable, limit: int = 3) -> List:
    """
    Profiles whose name appears in the recommendation list (case-insensitive).
    """
    names = {name.strip().lower() for name in (recommended or "").split(",") if name.strip()}
    matched = [p for p in profiles if p.name and p.name.lower() in names]
    return matched[:limit]
