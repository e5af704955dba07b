"""
Top‑level package for the Marketplace Admin console.

All functionality lives in submodules under ``app``: the REST client
and auth session in ``app.core``, one service per backend resource in
``app.services``, the page controllers in ``app.controllers`` and the
admin HTTP surface in ``app.api``.
"""

__all__ = []
