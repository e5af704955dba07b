"""
Shared payload types.

``ApiResult`` is what every service method returns: either the decoded
response body or an ``ApiError`` describing why the call failed.  The
caller decides whether a failure is fatal for its view or can be
ignored.  ``PaginationMeta`` models the ``pagination`` object attached
to list responses; it accepts the backend's camelCase keys.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


@dataclass
class ApiError:
    """A failed backend call.

    Attributes:
        message: Human readable reason, taken from the response body
            when the backend provides one.
        status_code: HTTP status, or ``None`` for transport failures.
    """

    message: str
    status_code: Optional[int] = None


@dataclass
class ApiResult:
    """Outcome of a single backend call."""

    body: Any = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def data(self) -> Any:
        """The ``data`` member of the response body, if any."""
        if isinstance(self.body, dict):
            return self.body.get("data")
        return None

    @property
    def message(self) -> Optional[str]:
        if isinstance(self.body, dict):
            return self.body.get("message")
        return None

    @property
    def items(self) -> List[Any]:
        """``data`` as a list; anything that is not a list yields ``[]``."""
        data = self.data
        return data if isinstance(data, list) else []

    def error_message(self, default: str) -> str:
        if self.error and self.error.message:
            return self.error.message
        return default


class PaginationMeta(BaseModel):
    """Pagination metadata attached to list responses."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(0, ge=0)
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    total_pages: int = Field(0, ge=0, alias="totalPages")
    has_next_page: bool = Field(False, alias="hasNextPage")

    @classmethod
    def zeroed(cls, limit: int = 10) -> "PaginationMeta":
        """Disabled pagination used when the backend sends none."""
        return cls(total=0, page=1, limit=max(limit, 1), total_pages=0, has_next_page=False)

    @classmethod
    def from_payload(cls, raw: Any, limit: int = 10) -> "PaginationMeta":
        """Build metadata from a response body's ``pagination`` member.

        Values are trusted as sent.  A missing or malformed object
        yields :meth:`zeroed` instead of raising.
        """
        if not isinstance(raw, dict) or not raw:
            return cls.zeroed(limit)
        try:
            return cls.model_validate(raw)
        except ValidationError:
            return cls.zeroed(limit)

    @classmethod
    def compute(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        """Derive metadata locally from a record count."""
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next_page=page < total_pages,
        )

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def range_text(self) -> str:
        """Describe the visible slice, e.g. ``"11 to 20 of 25"``."""
        if self.total == 0:
            return "0 to 0 of 0"
        start = (self.page - 1) * self.limit + 1
        end = min(self.page * self.limit, self.total)
        return f"{start} to {end} of {self.total}"

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
