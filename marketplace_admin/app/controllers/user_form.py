"""Edit user form."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..core.config import settings
from ..services.user_service import UserService
from ..utils.formatting import to_date_input
from .base import Controller, FormOutcome, ViewState


logger = logging.getLogger(__name__)

FIELDS = ("first_name", "last_name", "email", "phone", "country_code", "username", "dob", "type")
REQUIRED = {"first_name": "First name", "last_name": "Last name", "email": "Email"}


class UserForm(Controller):
    def __init__(
        self,
        service: UserService,
        user_id: Any,
        redirect_delay: float = settings.redirect_delay,
    ) -> None:
        super().__init__()
        self.service = service
        self.user_id = user_id
        self.redirect_delay = redirect_delay
        self.fields: Dict[str, Any] = {name: "" for name in FIELDS}
        self.user: Optional[Dict[str, Any]] = None
        self.state = ViewState.IDLE
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    def load(self) -> ViewState:
        generation = self._begin()
        self.state = ViewState.LOADING
        self.error = None
        result = self.service.get_user(self.user_id)
        if not self._is_current(generation):
            return self.state
        if not result.ok:
            self.error = result.error_message("Failed to fetch user")
            self.state = ViewState.ERRORED
            return self.state
        if not result.data:
            self.state = ViewState.NOT_FOUND
            return self.state
        self.user = result.data
        for name in FIELDS:
            self.fields[name] = self.user.get(name) or ""
        self.fields["dob"] = to_date_input(self.user.get("dob"))
        self.state = ViewState.LOADED
        return self.state

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise ValueError(f"Unknown user field {name!r}")
        self.fields[name] = value

    def update(self, values: Dict[str, Any]) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def build_payload(self) -> Dict[str, Any]:
        """JSON body: required fields always, optional ones only when set."""
        return {
            name: value
            for name, value in self.fields.items()
            if name in REQUIRED or value not in ("", None)
        }

    def validate(self) -> Optional[str]:
        for name, label in REQUIRED.items():
            if not str(self.fields[name] or "").strip():
                return f"{label} is required"
        return None

    def submit(self) -> FormOutcome:
        self.error = None
        self.success = None
        message = self.validate()
        if message:
            self.error = message
            return FormOutcome(success=False, message=message)
        result = self.service.update_user(self.user_id, self.build_payload())
        if not result.ok:
            self.error = result.error_message("Failed to update user")
            return FormOutcome(success=False, message=self.error)
        self.success = "User updated successfully"
        logger.info("User %s updated", self.user_id)
        return FormOutcome(
            success=True,
            message=self.success,
            redirect_to=f"/users/{self.user_id}",
            redirect_after=self.redirect_delay,
            data=result.data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "user_id": self.user_id,
            "fields": dict(self.fields),
            "error": self.error,
            "success": self.success,
        }
