"""
Detail page controllers.

A detail view fetches one record by id.  A failed fetch is terminal
for the view: the error is shown with a link back to the list and no
retry.  A successful response without a record is reported as
"not found", distinct from an error.

Return requests and contact enquiries additionally carry actions
(approve/reject, reply) whose outcome is reported inline.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..core.config import settings
from ..schemas.common import ApiResult
from ..services.contact_service import ContactService
from ..services.order_service import OrderService
from ..services.product_service import ProductService
from ..utils.formatting import format_date, format_price
from ..utils.images import get_image_url
from .base import Controller, FormOutcome, ViewState


logger = logging.getLogger(__name__)

RETURN_PENDING = 1
RETURN_APPROVED = 2
RETURN_REJECTED = 3


class DetailController(Controller):
    """Fetch and hold a single record."""

    error_message = "Failed to fetch record"
    back_to = "/"

    def __init__(self, fetch: Callable[[Any], ApiResult]) -> None:
        super().__init__()
        self.fetch = fetch
        self.state = ViewState.IDLE
        self.entity_id: Any = None
        self.entity: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.success: Optional[str] = None

    def load(self, entity_id: Any = None) -> ViewState:
        if entity_id is not None:
            self.entity_id = entity_id
        generation = self._begin()
        self.state = ViewState.LOADING
        self.error = None
        result = self.fetch(self.entity_id)
        if not self._is_current(generation):
            logger.debug("Discarding stale response for %s", self.entity_id)
            return self.state
        if not result.ok:
            self.entity = None
            self.error = result.error_message(self.error_message)
            self.state = ViewState.ERRORED
        elif not result.data:
            self.entity = None
            self.state = ViewState.NOT_FOUND
        else:
            self.entity = result.data
            self.state = ViewState.LOADED
        return self.state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "id": self.entity_id,
            "data": self.entity,
            "error": self.error,
            "success": self.success,
            "back_to": self.back_to,
        }


class ProductDetail(DetailController):
    error_message = "Failed to fetch product"
    back_to = "/products"

    def __init__(self, service: ProductService) -> None:
        super().__init__(service.get_product)

    def to_dict(self) -> Dict[str, Any]:
        view = super().to_dict()
        if self.entity:
            images = self.entity.get("images") or []
            view["image_urls"] = [
                get_image_url(image.get("full") or image.get("thumb") if isinstance(image, dict) else image)
                for image in images
            ]
            view["price_display"] = format_price(self.entity.get("price"))
            view["created"] = format_date(self.entity.get("created_at"))
        return view


class OrderDetail(DetailController):
    error_message = "Failed to fetch order"
    back_to = "/orders"

    def __init__(self, service: OrderService) -> None:
        super().__init__(service.get_order)


class ReturnRequestDetail(DetailController):
    """Return request with its approve and reject actions.

    Only pending requests can be decided.  The backend identifies the
    decision by order id, taken from ``order_id`` or the embedded
    ``order`` object.
    """

    error_message = "Failed to fetch return request"
    back_to = "/return-requests"

    def __init__(self, service: OrderService, redirect_delay: float = settings.redirect_delay) -> None:
        super().__init__(service.get_return_request)
        self.service = service
        self.redirect_delay = redirect_delay

    @property
    def return_status(self) -> int:
        if not self.entity:
            return RETURN_PENDING
        return self.entity.get("return_status") or RETURN_PENDING

    @property
    def can_approve_reject(self) -> bool:
        return self.entity is not None and self.return_status == RETURN_PENDING

    @property
    def order_id(self) -> Any:
        if not self.entity:
            return None
        order = self.entity.get("order") or {}
        return self.entity.get("order_id") or order.get("id")

    def approve(self) -> FormOutcome:
        return self._decide("approve", self.service.approve_return_request)

    def reject(self) -> FormOutcome:
        return self._decide("reject", self.service.reject_return_request)

    def _decide(self, action: str, call: Callable[[Any], ApiResult]) -> FormOutcome:
        self.error = None
        self.success = None
        order_id = self.order_id
        if not order_id:
            self.error = f"Order ID is missing. Cannot {action} return request."
            return FormOutcome(success=False, message=self.error)
        if not self.can_approve_reject:
            self.error = "Only pending return requests can be approved or rejected"
            return FormOutcome(success=False, message=self.error)
        result = call(order_id)
        if not result.ok:
            self.error = result.error_message(f"Failed to {action} return request")
            return FormOutcome(success=False, message=self.error)
        past = "approved" if action == "approve" else "rejected"
        self.success = f"Return request {past} successfully"
        logger.info("Return request %s %s (order %s)", self.entity_id, past, order_id)
        return FormOutcome(
            success=True,
            message=self.success,
            redirect_to=self.back_to,
            redirect_after=self.redirect_delay,
            data=result.data,
        )

    def to_dict(self) -> Dict[str, Any]:
        view = super().to_dict()
        view["can_approve_reject"] = self.can_approve_reject
        return view


class ContactEnquiryDetail(DetailController):
    error_message = "Failed to fetch contact enquiry"
    back_to = "/contact-enquiries"

    def __init__(self, service: ContactService) -> None:
        super().__init__(service.get_enquiry)
        self.service = service
        self.reply_message = ""
        self.reply_subject = ""

    def send_reply(self, message: str, subject: str = "") -> FormOutcome:
        """Send a reply and refresh the enquiry to pick up its new status."""
        self.error = None
        self.success = None
        self.reply_message = message
        self.reply_subject = subject
        if not message.strip():
            self.error = "Reply message is required"
            return FormOutcome(success=False, message=self.error)
        result = self.service.send_reply(
            self.entity_id, {"reply_message": message, "subject": subject}
        )
        if not result.ok:
            self.error = result.error_message("Failed to send reply")
            return FormOutcome(success=False, message=self.error)
        self.reply_message = ""
        self.load()
        self.success = "Reply sent successfully"
        return FormOutcome(success=True, message=self.success, data=result.data)
