"""Entry point for the marketplace admin console.

Starts the FastAPI admin API with uvicorn.  Host and port come from
``ADMIN_HOST`` and ``ADMIN_PORT``; the backend URL and other options
are read by :mod:`marketplace_admin.app.core.config`.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from marketplace_admin.app.core.config import settings
from marketplace_admin.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.admin_host,
        port=settings.admin_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
