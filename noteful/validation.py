"""
ObjectId helpers.

Every document id is a 24-character hex ObjectId. Ids arriving from clients
are checked here before they reach a query, so malformed values produce a
400 instead of an empty result or a driver error.
"""

from typing import Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from noteful.exceptions import ValidationError


def new_object_id() -> str:
    """Generates a fresh ObjectId as its 24-character hex string."""
    return str(ObjectId())


def is_valid_object_id(value: object) -> bool:
    """True only for 24-character hexadecimal strings."""
    if not isinstance(value, str) or len(value) != 24:
        return False
    try:
        ObjectId(value)
    except (InvalidId, TypeError):
        return False
    return True


def require_object_id(value: Optional[str], field: str = "id") -> str:
    """
    Returns `value` normalized to lower case, or raises ValidationError.

    Message format matches the API contract: "The `<field>` is not valid".
    """
    if not is_valid_object_id(value):
        raise ValidationError(message=f"The `{field}` is not valid", field=field)
    return value.lower()


def require_object_ids(values: Iterable[str], field: str) -> List[str]:
    """Validates every id in `values`; duplicates are collapsed, order kept."""
    seen: List[str] = []
    for value in values:
        oid = require_object_id(value, field)
        if oid not in seen:
            seen.append(oid)
    return seen
