"""
Validation helpers shared by the services.
"""

from typing import Optional
from realestate_api.utils.exceptions import NotFoundError
import uuid


def parse_id(value: Optional[str], resource: str) -> uuid.UUID:
    """
    Parse a record id taken from the URL.

    A malformed id cannot name an existing record, so it is reported the
    same way as an unknown one.

    Raises:
        NotFoundError: If the value is not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise NotFoundError(resource, str(value))
