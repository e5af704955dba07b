"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one admin screen family (users,
products, orders, ...).  The routers are aggregated in ``router.py``.
"""
