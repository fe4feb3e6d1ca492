"""
Validation utilities for profiles, discussions and messages.
"""

import re
from typing import Tuple

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate an email address.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(email, str) or not email.strip():
        return False, "Email is required"

    if not EMAIL_PATTERN.match(email.strip()):
        return False, "Invalid email format"

    return True, ""


def validate_student_details(data: dict) -> Tuple[bool, str]:
    """Year must be a positive integer; interests must be a list of strings."""
    if "year" in data:
        try:
            year = int(data["year"])
        except (TypeError, ValueError):
            return False, "Year must be a number"
        if year < 1:
            return False, "Year must be a positive number"

    interests = data.get("academicInterests")
    if interests is not None and not isinstance(interests, (list, str)):
        return False, "Academic interests must be a list"

    return True, ""


def validate_alumni_details(data: dict) -> Tuple[bool, str]:
    """Experience years must be a non-negative integer; skills a list of strings."""
    if "experienceYears" in data:
        try:
            years = int(data["experienceYears"])
        except (TypeError, ValueError):
            return False, "Experience years must be a number"
        if years < 0:
            return False, "Experience cannot be negative"

    skills = data.get("skills")
    if skills is not None and not isinstance(skills, (list, str)):
        return False, "Skills must be a list"

    return True, ""


def validate_thread_content(content: str) -> Tuple[bool, str]:
    """Thread body: non-blank, at most 2000 characters."""
    if not isinstance(content, str) or not content.strip():
        return False, "Content is required"

    if len(content.strip()) > 2000:
        return False, "Content must not exceed 2000 characters"

    return True, ""


def validate_comment(content: str) -> Tuple[bool, str]:
    """Comments: 1-1000 characters once stripped."""
    if not isinstance(content, str) or not content.strip():
        return False, "Comment cannot be empty"

    if len(content.strip()) > 1000:
        return False, "Comment is too long"

    return True, ""
