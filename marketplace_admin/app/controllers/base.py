"""
Building blocks shared by the page controllers.

``Controller`` carries the request generation counter used to discard
stale responses: every fetch takes a new generation number and its
result is applied only if no newer fetch was started and the view was
not closed in the meantime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ViewState(str, Enum):
    """Lifecycle of a list or detail view."""

    IDLE = "idle"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    ERRORED = "errored"
    LOADED = "loaded"
    NOT_FOUND = "not_found"


class Controller:
    def __init__(self) -> None:
        self.generation = 0
        self.closed = False

    def _begin(self) -> int:
        self.generation += 1
        return self.generation

    def _is_current(self, generation: int) -> bool:
        return not self.closed and generation == self.generation

    def close(self) -> None:
        """Mark the view as gone; responses still in flight are dropped."""
        self.closed = True


@dataclass
class FormOutcome:
    """Result of submitting a form or triggering an action."""

    success: bool
    message: str
    redirect_to: Optional[str] = None
    redirect_after: float = 0.0
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "redirect_to": self.redirect_to,
            "redirect_after": self.redirect_after,
            "data": self.data,
        }
