"""
Main entrypoint for the marketplace admin console.

This module assembles the FastAPI application, sets up logging and
includes the versioned routers.  ``create_app`` builds the app around a
shared :class:`ApiClient` and :class:`AuthSession`; the module-level
``app`` is what uvicorn serves::

    uvicorn marketplace_admin.app.main:app --reload
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.auth import AuthSession, TokenStore
from .core.config import settings
from .core.http import ApiClient
from .core.logging_config import setup_logging


def create_app(api_client: Optional[ApiClient] = None, auth: Optional[AuthSession] = None) -> FastAPI:
    """Create and configure the admin application.

    Parameters
    ----------
    api_client:
        Backend client to use.  Built from ``settings`` when omitted.
    auth:
        Session holding the admin token.  When omitted a session backed
        by the token file at ``settings.auth_store_path`` is restored.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that the session restore below is logged.
    setup_logging(settings.log_level, settings.log_file or None)

    if auth is None:
        auth = AuthSession(TokenStore(settings.auth_store_path))
        auth.init()
    if api_client is None:
        api_client = ApiClient(
            base_url=settings.backend_base_url,
            auth=auth,
            timeout=settings.request_timeout,
        )

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.auth = auth
    app.state.api_client = api_client

    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
