"""
Service layer.

Each service wraps the backend endpoints of one resource.  A method
builds the query string or body from its arguments, performs one call
through the shared :class:`~marketplace_admin.app.core.http.ApiClient`
and returns the resulting ``ApiResult`` untouched.  Whether a failure
matters is decided by the caller.
"""

from .auth_service import AuthService
from .contact_service import ContactService
from .dashboard_service import DashboardService
from .master_service import MasterService
from .order_service import OrderService
from .product_service import ProductService
from .trustap_service import TrustapService
from .user_service import UserService

__all__ = [
    "AuthService",
    "ContactService",
    "DashboardService",
    "MasterService",
    "OrderService",
    "ProductService",
    "TrustapService",
    "UserService",
]
