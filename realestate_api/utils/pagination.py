"""
Page/limit resolution for list endpoints.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from realestate_api.utils.exceptions import BadRequestError, InvalidPageSizeError


@dataclass(frozen=True)
class Page:
    """A resolved page request. Pages are 1-indexed."""

    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def resolve_page(
    limit: Optional[int],
    page: Optional[int],
    default_limit: Optional[int] = None,
    allowed_limits: Optional[Sequence[int]] = None,
) -> Page:
    """
    Validate pagination parameters and build a Page.

    When allowed_limits is given the limit must be one of them and has no
    default; this check runs before the page is looked at. Otherwise a missing
    limit falls back to default_limit.

    Raises:
        InvalidPageSizeError: If the limit is not one of allowed_limits
        BadRequestError: If limit or page is below 1
    """
    if allowed_limits is not None:
        if limit not in allowed_limits:
            raise InvalidPageSizeError(list(allowed_limits))
    elif limit is None:
        limit = default_limit

    if limit is None or limit < 1:
        raise BadRequestError("The limite parameter must be a positive integer")

    if page is None:
        page = 1
    if page < 1:
        raise BadRequestError("The pagina parameter must be a positive integer")

    return Page(limit=limit, page=page)
