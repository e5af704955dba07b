"""
HTTP client for the marketplace backend.

All service classes talk to the backend through :class:`ApiClient`, a
thin wrapper around a ``requests`` session.  It joins paths to the
configured base URL, attaches the bearer token held by the
:class:`~marketplace_admin.app.core.auth.AuthSession`, and turns every
outcome into an :class:`~marketplace_admin.app.schemas.common.ApiResult`
instead of raising.  A 401 response forces a logout.

The client performs exactly one HTTP call per request: no retries and
no caching.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests

from ..schemas.common import ApiError, ApiResult
from .auth import AuthSession


logger = logging.getLogger(__name__)

# A file part as accepted by ``requests``: (field, (filename, content, content_type)).
FilePart = Tuple[str, Tuple[str, Any, str]]


def clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop query parameters left at their empty sentinel.

    ``None``, ``''``, ``0`` and ``False`` mean "not set" and are not
    sent at all; the backend treats an absent filter differently from
    an empty one.
    """
    return {key: value for key, value in params.items() if value not in (None, "", 0, False)}


class ApiClient:
    """Client for the marketplace REST backend."""

    def __init__(
        self,
        *,
        base_url: str,
        auth: Optional[AuthSession] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the backend, e.g. ``https://api.example.com``.
            auth: Session providing the bearer token.  Without it requests
                are sent unauthenticated.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any | None = None,
        form: Optional[Iterable[Tuple[str, str]]] = None,
        files: Optional[List[FilePart]] = None,
    ) -> ApiResult:
        """Perform an HTTP request to the backend.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ...).
            path: Path relative to :attr:`base_url` (e.g. ``/v2/user``).
            params: Query parameters, already cleaned by the caller.
            json_body: JSON body for POST/PATCH requests.
            form: Text fields of a multipart body.
            files: File parts of a multipart body.
        Returns:
            An :class:`ApiResult` holding the decoded body on success or
            an :class:`ApiError` on failure.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.auth is not None and self.auth.token:
            headers["Authorization"] = f"Bearer {self.auth.token}"
        kwargs: Dict[str, Any] = {}
        if form is not None or files is not None:
            # requests only switches to multipart when files are present;
            # send text fields as file-less parts when there are none.
            parts: List[Any] = [(key, (None, value)) for key, value in (form or [])]
            parts.extend(files or [])
            kwargs["files"] = parts
        elif json_body is not None:
            kwargs["json"] = json_body
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
            if response.content:
                return ApiResult(body=response.json())
            return ApiResult(body=None)
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("message") or err_json.get("detail") or ""
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, path, status, message)
            if status == 401 and self.auth is not None:
                self.auth.logout()
            return ApiResult(error=ApiError(message=message, status_code=status))
        except ValueError as exc:
            logger.error("API request %s %s returned invalid JSON: %s", method, path, exc)
            return ApiResult(error=ApiError(message="Invalid response from server"))
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            return ApiResult(error=ApiError(message=str(exc)))

    def get(self, path: str, **params: Any) -> ApiResult:
        """GET ``path`` with the non-empty ``params`` as query string."""
        return self.request("GET", path, params=clean_params(params))

    def post(self, path: str, json_body: Any | None = None) -> ApiResult:
        return self.request("POST", path, json_body=json_body)

    def patch(self, path: str, json_body: Any | None = None) -> ApiResult:
        return self.request("PATCH", path, json_body=json_body)

    def delete(self, path: str, **params: Any) -> ApiResult:
        return self.request("DELETE", path, params=clean_params(params))
