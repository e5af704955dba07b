"""
Top-level router for version 1 of the admin API.

The auth routes are open; every other screen requires an admin to be
logged in to the backend.  When a new screen is added, include its
router here.
"""

from fastapi import APIRouter, Depends

from ..deps import require_login
from .endpoints import (
    auth,
    contact_enquiries,
    dashboard,
    orders,
    products,
    return_requests,
    transactions,
    users,
)

router = APIRouter()
protected = [Depends(require_login)]

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"], dependencies=protected)
router.include_router(users.router, prefix="/users", tags=["users"], dependencies=protected)
router.include_router(products.router, prefix="/products", tags=["products"], dependencies=protected)
router.include_router(orders.router, prefix="/orders", tags=["orders"], dependencies=protected)
router.include_router(
    return_requests.router, prefix="/return-requests", tags=["return-requests"], dependencies=protected
)
router.include_router(
    contact_enquiries.router, prefix="/contact-enquiries", tags=["contact-enquiries"], dependencies=protected
)
router.include_router(transactions.router, prefix="/transactions", tags=["transactions"], dependencies=protected)
