"""
Service for managing user profiles.

- get_profile - Fetches a user profile.
- set_profile - Creates or updates a user profile.
- initialize_role_profile - Default role details for a newly selected role.
- select_role - One-time role selection.
- get_profiles_by_role - All profiles with a given role.
- filter_alumni - In-memory alumni directory filtering.
"""

import logging
from typing import Iterable, List, Optional

from bson.objectid import ObjectId
from mongoengine.errors import NotUniqueError, ValidationError as DocumentValidationError

from backend.models import UserModel, StudentDetails, AlumniDetails, ROLES
from backend.utils.documents import get_or_404
from backend.utils.errors import ValidationError
from backend.utils.post_validator import normalize_tags
from backend.utils.session_context import SessionContext
from backend.utils.validators import (
    validate_email, validate_student_details, validate_alumni_details
)

logger = logging.getLogger(__name__)

SELECTABLE_ROLES = ("student", "alumni")

STUDENT_FIELDS = {
    "college": "college",
    "year": "year",
    "academicInterests": "academic_interests",
    "goals": "goals",
}

ALUMNI_FIELDS = {
    "jobTitle": "job_title",
    "company": "company",
    "skills": "skills",
    "experienceYears": "experience_years",
    "education": "education",
    "industry": "industry",
    "linkedinUrl": "linkedin_url",
}


def get_profile(user_id: str) -> Optional[UserModel]:
    if not user_id:
        logger.error("get_profile: user_id is required")
        return None
    if not ObjectId.is_valid(user_id):
        return None
    try:
        return UserModel.objects(id=ObjectId(user_id)).first()
    except Exception as e:
        logger.error(f"Error fetching profile {user_id}: {str(e)}")
        raise


def initialize_role_profile(role: str):
    """
    Build the default details document for a role.

    Args:
        role: "student" or "alumni"

    Returns:
        StudentDetails or AlumniDetails with empty values
    """
    if role == "student":
        return StudentDetails(college="", year=1, academic_interests=[], goals="")
    if role == "alumni":
        return AlumniDetails(
            job_title="", company="", skills=[], experience_years=0,
            education="", industry=""
        )
    raise ValidationError(f"Role '{role}' has no profile details")


def _apply_role(profile: UserModel, role: str) -> None:
    if role not in ROLES or role == "unset":
        raise ValidationError(f"Invalid role: {role}")
    if profile.role == role:
        return
    if profile.role != "unset":
        raise ValidationError("Role cannot be changed once selected")

    profile.role = role
    profile.details = initialize_role_profile(role) if role in SELECTABLE_ROLES else None


def _merge_details(profile: UserModel, data: dict) -> None:
    if profile.role == "student":
        is_valid, error = validate_student_details(data)
        fields = STUDENT_FIELDS
    else:
        is_valid, error = validate_alumni_details(data)
        fields = ALUMNI_FIELDS
    if not is_valid:
        raise ValidationError(error)

    if profile.details is None:
        profile.details = initialize_role_profile(profile.role)

    for key, attr in fields.items():
        if key not in data:
            continue
        value = data[key]
        if attr in ("academic_interests", "skills"):
            value = normalize_tags(value)
        elif attr in ("year", "experience_years"):
            value = int(value)
        elif isinstance(value, str):
            value = value.strip()
        setattr(profile.details, attr, value)


def _save(profile: UserModel) -> UserModel:
    try:
        profile.save()
    except DocumentValidationError as e:
        raise ValidationError(e.message)
    except NotUniqueError:
        raise ValidationError("Email already exists")
    except Exception as e:
        logger.error(f"Error saving profile: {str(e)}")
        raise
    return profile


def set_profile(user_id: Optional[str], data: dict) -> UserModel:
    """
    Create or update (merge) a profile.

    Args:
        user_id: Existing profile id, or None to create a new profile
        data: camelCase profile fields; studentProfile / alumniProfile
              must match the profile's role

    Returns:
        The saved profile
    """
    profile = get_profile(user_id) if user_id else None

    if profile is None:
        email = data.get("email")
        is_valid, error = validate_email(email)
        if not is_valid:
            raise ValidationError(error)
        profile = UserModel(email=email.strip().lower())
        if user_id and ObjectId.is_valid(user_id):
            profile.id = ObjectId(user_id)
        logger.info(f"Creating profile for {profile.email}")

    if "name" in data:
        name = data.get("name")
        profile.name = (name.strip() if isinstance(name, str) else "") or None
    if "avatarUrl" in data:
        profile.avatar_url = data.get("avatarUrl") or None
    if data.get("role"):
        if data["role"] not in SELECTABLE_ROLES:
            raise ValidationError("Role must be 'student' or 'alumni'")
        _apply_role(profile, data["role"])

    for key, role in (("studentProfile", "student"), ("alumniProfile", "alumni")):
        if data.get(key) is None:
            continue
        if profile.role != role:
            raise ValidationError(f"{key} is only valid for {role} profiles")
        _merge_details(profile, data[key])

    return _save(profile)


def select_role(ctx: SessionContext, role: str) -> UserModel:
    """
    Select the acting user's role for the first time.
    Selecting the current role again is a no-op.
    """
    if role not in SELECTABLE_ROLES:
        raise ValidationError("Role must be 'student' or 'alumni'")

    profile = get_or_404(UserModel, ctx.require_user(), "Profile")
    _apply_role(profile, role)
    logger.info(f"User {profile.id} selected role {role}")
    return _save(profile)


def find_or_create_by_email(email: str, name: str = None, avatar_url: str = None) -> UserModel:
    """Used by sign-in: returns the existing profile or creates an unset one."""
    is_valid, error = validate_email(email)
    if not is_valid:
        raise ValidationError(error)

    email = email.strip().lower()
    profile = UserModel.objects(email=email).first()
    if profile:
        return profile

    profile = UserModel(email=email, name=name, avatar_url=avatar_url)
    logger.info(f"Created profile for {email}")
    return _save(profile)


def get_profiles_by_role(role: str) -> List[UserModel]:
    if not role:
        logger.error("get_profiles_by_role: role is required")
        return []
    try:
        return list(UserModel.objects(role=role).order_by("name"))
    except Exception as e:
        logger.error(f"Error fetching profiles for role {role}: {str(e)}")
        raise


# ============================================================================
# ALUMNI DIRECTORY
# ============================================================================


def filter_alumni(
    profiles: Iterable[UserModel],
    search_term: str = "",
    skills: Optional[List[str]] = None,
    industry: str = "",
    company: str = "",
) -> List[UserModel]:
    """
    Filter alumni profiles in memory.

    Args:
        profiles: Alumni profiles to scan
        search_term: Case-insensitive substring of name or email
        skills: Every listed skill must be present on the profile
        industry: Case-insensitive exact industry match
        company: Case-insensitive substring of company

    Returns:
        Matching profiles, in input order
    """
    term = (search_term or "").strip().lower()
    industry = (industry or "").strip().lower()
    company = (company or "").strip().lower()
    skills = [s for s in (skills or []) if s]

    result = []
    for profile in profiles:
        details = profile.alumni_profile
        if term and term not in (profile.name or "").lower() and term not in (profile.email or "").lower():
            continue
        if skills and not (details and all(skill in details.skills for skill in skills)):
            continue
        if industry and not (details and details.industry.lower() == industry):
            continue
        if company and not (details and company in details.company.lower()):
            continue
        result.append(profile)
    return result


def available_skills(profiles: Iterable[UserModel]) -> List[str]:
    skills = set()
    for profile in profiles:
        if profile.alumni_profile:
            skills.update(profile.alumni_profile.skills)
    return sorted(skills)


def available_industries(profiles: Iterable[UserModel]) -> List[str]:
    return sorted({
        profile.alumni_profile.industry
        for profile in profiles
        if profile.alumni_profile and profile.alumni_profile.industry
    })


def get_alumni_industries() -> List[str]:
    """Distinct alumni industries; empty list when the store is unavailable."""
    try:
        return available_industries(get_profiles_by_role("alumni"))
    except Exception as e:
        logger.error(f"Error fetching alumni industries: {str(e)}")
        return []
