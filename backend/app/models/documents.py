"""
StudyMate Backend — Document Helpers
======================================

What:  Collection names, identifier parsing, and BSON → JSON-safe conversion.
Why:   Every service needs the same three conversions; keeping them here
       means routes and schemas never import bson directly.

Collections (database `studyMateDB` by default):
    partners   Study partner profiles
    requests   Connection requests sent to partners

Field names in the store are camelCase (`profileImage`, `partnerCount`),
the shape the frontend sends and reads. The pydantic schemas alias them to
snake_case attributes.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from bson import ObjectId
from bson.errors import InvalidId

from app.exceptions import InvalidIdentifierError

PARTNERS_COLLECTION = "partners"
REQUESTS_COLLECTION = "requests"

# Fields written once by the server and never accepted from clients
SERVER_MANAGED_FIELDS = frozenset({"_id", "createdAt"})


def parse_object_id(value: str) -> ObjectId:
    """
    Convert a path parameter into an ObjectId.

    Raises:
        InvalidIdentifierError: value is not a 24-character hex string.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(value) from e


def utc_now() -> datetime:
    """Timestamp for createdAt. Always timezone-aware UTC."""
    return datetime.now(timezone.utc)


def serialize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Make a raw motor document safe for pydantic/JSON.

    ObjectId values (the `_id` and any stored references) become strings.
    Nested documents and lists are converted recursively. Everything else
    passes through; FastAPI's encoder handles datetimes.
    """
    return {key: _serialize_value(value) for key, value in document.items()}


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return serialize_document(value)
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    return value
