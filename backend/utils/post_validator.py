"""
Validation and cleanup helpers for alumni posts.
Titles are shared with discussion threads.
"""

import re
from typing import Tuple
import bleach

TITLE_MIN, TITLE_MAX = 5, 100
CONTENT_MIN, CONTENT_MAX = 10, 5000
CATEGORY_MIN, CATEGORY_MAX = 2, 50
MAX_TAGS, TAG_MAX = 10, 30
LINK_TEXT_MAX = 100

# scheme://host[:port][/path]; host is a dotted name, localhost or an IPv4 address
URL_PATTERN = re.compile(
    r'^https?://(?:[a-z0-9-]+(?:\.[a-z0-9-]+)*\.[a-z]{2,}|localhost|\d{1,3}(?:\.\d{1,3}){3})'
    r'(?::\d{1,5})?(?:[/?#]\S*)?$',
    re.IGNORECASE,
)

URL_FIELDS = {
    "imageUrl": "image",
    "videoUrl": "video",
    "externalLinkUrl": "external link",
}

SAFE_TAGS = frozenset({
    'p', 'br', 'strong', 'em', 'u', 'h2', 'h3', 'h4',
    'ul', 'ol', 'li', 'a', 'blockquote', 'code', 'pre',
})
SAFE_ATTRIBUTES = {'a': ['href', 'title']}


def validate_title(title: str, max_length: int = TITLE_MAX) -> Tuple[bool, str]:
    """
    Post or thread title: 5 to max_length characters once stripped.

    Returns:
        Tuple of (is_valid, error_message)
    """
    title = title.strip() if isinstance(title, str) else ""
    if not title:
        return False, "Title is required"
    if len(title) < TITLE_MIN:
        return False, f"Title must be at least {TITLE_MIN} characters long"
    if len(title) > max_length:
        return False, f"Title must not exceed {max_length} characters"
    return True, ""


def validate_content(content: str, max_length: int = CONTENT_MAX) -> Tuple[bool, str]:
    content = content.strip() if isinstance(content, str) else ""
    if not content:
        return False, "Content is required"
    if len(content) < CONTENT_MIN:
        return False, f"Content must be at least {CONTENT_MIN} characters long"
    if len(content) > max_length:
        return False, f"Content must not exceed {max_length:,} characters"
    return True, ""


def validate_category(category: str) -> Tuple[bool, str]:
    category = category.strip() if isinstance(category, str) else ""
    if not category:
        return False, "Category is required"
    if not CATEGORY_MIN <= len(category) <= CATEGORY_MAX:
        return False, f"Category must be between {CATEGORY_MIN} and {CATEGORY_MAX} characters long"
    return True, ""


def normalize_tags(tags) -> list:
    """
    Accept a list or a comma-separated string; strip, drop blanks and duplicates.
    Order of first appearance is kept.
    """
    if isinstance(tags, str):
        tags = tags.split(",")

    normalized = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag not in normalized:
            normalized.append(tag)
    return normalized


def validate_tags(tags) -> Tuple[bool, str]:
    """
    Optional tags, as a list of strings or a comma-separated string.
    At most 10 distinct tags of at most 30 characters each.
    """
    if not tags:
        return True, ""
    if not isinstance(tags, (list, str)):
        return False, "Tags must be a list"
    if isinstance(tags, list) and any(not isinstance(tag, str) for tag in tags):
        return False, "All tags must be strings"

    normalized = normalize_tags(tags)
    if len(normalized) > MAX_TAGS:
        return False, f"Maximum {MAX_TAGS} tags allowed"
    if any(len(tag) > TAG_MAX for tag in normalized):
        return False, f"Each tag must not exceed {TAG_MAX} characters"
    return True, ""


def validate_url(url: str, label: str) -> Tuple[bool, str]:
    """Optional URL; empty is allowed, anything else must be http(s)."""
    if not url:
        return True, ""
    if not isinstance(url, str) or not URL_PATTERN.match(url.strip()):
        return False, f"Invalid URL format for {label}"
    return True, ""


def sanitize_html(content: str) -> str:
    """Strip every tag and attribute outside the small formatting whitelist."""
    return bleach.clean(content, tags=SAFE_TAGS, attributes=SAFE_ATTRIBUTES, strip=True)


def validate_post_data(data: dict, partial: bool = False) -> Tuple[bool, str]:
    """
    Validate the camelCase post payload sent by the client.

    Args:
        data: Post fields
        partial: Only check the fields present (updates)

    Returns:
        Tuple of (is_valid, error_message)
    """
    required = (
        ("title", validate_title),
        ("content", validate_content),
        ("category", validate_category),
    )
    for field, check in required:
        if partial and field not in data:
            continue
        is_valid, error = check(data.get(field))
        if not is_valid:
            return False, error

    is_valid, error = validate_tags(data.get("tags"))
    if not is_valid:
        return False, error

    for field, label in URL_FIELDS.items():
        is_valid, error = validate_url(data.get(field), label)
        if not is_valid:
            return False, error

    link_text = data.get("externalLinkText") or ""
    if len(link_text) > LINK_TEXT_MAX:
        return False, f"External link text must not exceed {LINK_TEXT_MAX} characters"

    return True, ""
