"""
Authentication session for the admin console.

The session keeps the bearer token and the profile of the logged in
staff member.  Both are mirrored to a small JSON file so that a restart
keeps the operator logged in, the same way the browser dashboard keeps
them in local storage.  The session is created once at startup,
initialised from disk with :meth:`AuthSession.init` and handed to the
:class:`~marketplace_admin.app.core.http.ApiClient`, which attaches the
token to every request and calls :meth:`AuthSession.logout` when the
backend answers 401.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from ..services.auth_service import AuthService


logger = logging.getLogger(__name__)

LOGIN_SUCCESS_MESSAGE = "Login successfully"


class TokenStore:
    """File backed storage for the token and user profile."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        if not self.path.exists():
            return None, None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable auth store %s: %s", self.path, exc)
            return None, None
        if not isinstance(stored, dict):
            return None, None
        return stored.get("token") or None, stored.get("user") or None

    def save(self, token: str, user: Optional[Dict[str, Any]]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"token": token, "user": user}, f)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthSession:
    """Explicit holder of the auth token and user profile."""

    def __init__(self, store: Optional[TokenStore] = None) -> None:
        self.store = store
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self._logout_hooks: List[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def init(self) -> None:
        """Restore the persisted token, if any."""
        if self.store is None:
            return
        self.token, self.user = self.store.load()
        if self.token:
            logger.info("Restored admin session from %s", self.store.path)

    def add_logout_hook(self, hook: Callable[[], None]) -> None:
        """Register a callback fired after :meth:`logout`."""
        self._logout_hooks.append(hook)

    def set_credentials(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        self.token = token
        self.user = user
        self.error = None
        if self.store is not None:
            self.store.save(token, user)

    def login(self, service: "AuthService", email: str, password: str) -> bool:
        """Log in through the backend and persist the session.

        The backend signals success with the message
        ``"Login successfully"``; anything else is treated as a failed
        login and its message is kept in :attr:`error`.  A failed attempt
        leaves any current session as it was.
        """
        result = service.login(email, password)
        if not result.ok:
            self.error = result.error_message("Login failed. Please try again.")
            return False
        if result.message != LOGIN_SUCCESS_MESSAGE or not isinstance(result.data, dict):
            self.error = result.message or "Login failed"
            return False
        token = result.data.get("access_token")
        if not token:
            self.error = "Login failed"
            return False
        self.set_credentials(token, result.data)
        logger.info("Admin %s logged in", email)
        return True

    def logout(self) -> None:
        """Forget the session in memory and on disk."""
        was_authenticated = self.is_authenticated
        self.token = None
        self.user = None
        self.error = None
        if self.store is not None:
            self.store.clear()
        if was_authenticated:
            logger.info("Admin session cleared")
        for hook in self._logout_hooks:
            hook()
