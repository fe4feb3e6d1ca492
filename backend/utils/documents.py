"""
Helpers for loading documents by id.
"""

from datetime import datetime, timezone
from bson.objectid import ObjectId

from backend.utils.errors import NotFoundError, ValidationError


def utcnow() -> datetime:
    """Write-time timestamp for every stored document."""
    return datetime.now(timezone.utc)


def get_or_404(model, doc_id: str, label: str):
    """
    Fetch a document by id.

    Raises:
        ValidationError: if doc_id is empty
        NotFoundError: if doc_id is malformed or no document matches
    """
    if not doc_id:
        raise ValidationError(f"{label} ID is required")

    if not ObjectId.is_valid(doc_id):
        raise NotFoundError(f"{label} not found")

    doc = model.objects(id=ObjectId(doc_id)).first()
    if doc is None:
        raise NotFoundError(f"{label} not found")
    return doc
