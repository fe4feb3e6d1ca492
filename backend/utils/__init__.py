"""
Utilities package initialization.
Exports validation functions and the error taxonomy.
"""

from .errors import (
    ServiceError, ValidationError, PermissionDeniedError, NotFoundError,
    ConfigurationError
)
from .validators import validate_email, validate_comment, validate_thread_content
from .post_validator import (
    validate_title, validate_content, validate_category, validate_tags,
    validate_url, validate_post_data, normalize_tags, sanitize_html
)

__all__ = [
    'ServiceError', 'ValidationError', 'PermissionDeniedError', 'NotFoundError',
    'ConfigurationError',
    'validate_email', 'validate_comment', 'validate_thread_content',
    'validate_title', 'validate_content', 'validate_category', 'validate_tags',
    'validate_url', 'validate_post_data', 'normalize_tags', 'sanitize_html'
]
