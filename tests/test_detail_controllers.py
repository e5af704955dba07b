"""
Tests for the detail page controllers and their actions.
"""

from unittest.mock import MagicMock

import pytest

from marketplace_admin.app.controllers.base import ViewState
from marketplace_admin.app.controllers.details import (
    ContactEnquiryDetail,
    OrderDetail,
    ProductDetail,
    ReturnRequestDetail,
)
from marketplace_admin.app.services.contact_service import ContactService
from marketplace_admin.app.services.order_service import OrderService
from marketplace_admin.app.services.product_service import ProductService

from factories import failed, ok


@pytest.fixture
def order_service():
    return MagicMock(spec=OrderService)


def test_detail_loaded(order_service):
    order_service.get_order.return_value = ok({"id": 7, "tracking": {"number": "TRK1"}})
    detail = OrderDetail(order_service)

    assert detail.load(7) is ViewState.LOADED
    assert detail.to_dict()["data"]["tracking"]["number"] == "TRK1"
    order_service.get_order.assert_called_once_with(7)


def test_detail_not_found_is_distinct_from_error(order_service):
    order_service.get_order.return_value = ok(None)
    detail = OrderDetail(order_service)

    assert detail.load(7) is ViewState.NOT_FOUND
    assert detail.error is None


def test_detail_error_offers_way_back(order_service):
    order_service.get_order.return_value = failed("")
    detail = OrderDetail(order_service)

    assert detail.load(7) is ViewState.ERRORED
    view = detail.to_dict()
    assert view["error"] == "Failed to fetch order"
    assert view["back_to"] == "/orders"
    assert order_service.get_order.call_count == 1


def test_product_detail_display_fields():
    service = MagicMock(spec=ProductService)
    service.get_product.return_value = ok(
        {
            "id": 3,
            "price": "1234.5",
            "created_at": "2025-01-05T10:00:00Z",
            "images": [{"full": "https://cdn.test/a.jpg"}, "https://cdn.test/b.jpg"],
        }
    )
    detail = ProductDetail(service)

    detail.load(3)
    view = detail.to_dict()

    assert view["price_display"] == "AED 1,234.50"
    assert view["created"] == "Jan 5, 2025"
    assert view["image_urls"] == ["https://cdn.test/a.jpg", "https://cdn.test/b.jpg"]


def loaded_return_request(order_service, **fields):
    order_service.get_return_request.return_value = ok({"id": 11, **fields})
    detail = ReturnRequestDetail(order_service, redirect_delay=0)
    detail.load(11)
    return detail


def test_pending_return_request_can_be_approved(order_service):
    detail = loaded_return_request(order_service, return_status=1, order={"id": 42})
    order_service.approve_return_request.return_value = ok({"id": 42}, message="Approved")

    outcome = detail.approve()

    assert outcome.success
    assert outcome.message == "Return request approved successfully"
    assert outcome.redirect_to == "/return-requests"
    order_service.approve_return_request.assert_called_once_with(42)


def test_reject_uses_order_id_field(order_service):
    detail = loaded_return_request(order_service, return_status=1, order_id=5)
    order_service.reject_return_request.return_value = ok({})

    outcome = detail.reject()

    assert outcome.success
    assert outcome.message == "Return request rejected successfully"
    order_service.reject_return_request.assert_called_once_with(5)


def test_missing_order_id_blocks_the_request(order_service):
    detail = loaded_return_request(order_service, return_status=1)

    outcome = detail.approve()

    assert not outcome.success
    assert outcome.message == "Order ID is missing. Cannot approve return request."
    order_service.approve_return_request.assert_not_called()


def test_missing_status_counts_as_pending(order_service):
    detail = loaded_return_request(order_service, order_id=5)

    assert detail.can_approve_reject


def test_decided_request_cannot_be_changed(order_service):
    detail = loaded_return_request(order_service, return_status=2, order_id=5)

    outcome = detail.reject()

    assert not detail.can_approve_reject
    assert not outcome.success
    order_service.reject_return_request.assert_not_called()


def test_approve_failure_keeps_backend_message(order_service):
    detail = loaded_return_request(order_service, return_status=1, order_id=5)
    order_service.approve_return_request.return_value = failed("Refund window closed")

    outcome = detail.approve()

    assert outcome.message == "Refund window closed"
    assert detail.error == "Refund window closed"


@pytest.fixture
def contact_service():
    service = MagicMock(spec=ContactService)
    service.get_enquiry.return_value = ok({"id": 9, "status": 0})
    return service


def test_reply_requires_message(contact_service):
    detail = ContactEnquiryDetail(contact_service)
    detail.load(9)

    outcome = detail.send_reply("   ")

    assert outcome.message == "Reply message is required"
    contact_service.send_reply.assert_not_called()


def test_reply_reloads_enquiry(contact_service):
    detail = ContactEnquiryDetail(contact_service)
    detail.load(9)
    contact_service.send_reply.return_value = ok({"id": 1})
    contact_service.get_enquiry.return_value = ok({"id": 9, "status": 1})

    outcome = detail.send_reply("We shipped it", subject="Your order")

    assert outcome.success
    assert outcome.message == "Reply sent successfully"
    assert detail.entity["status"] == 1
    assert detail.reply_message == ""
    contact_service.send_reply.assert_called_once_with(
        9, {"reply_message": "We shipped it", "subject": "Your order"}
    )


def test_reply_failure_keeps_draft(contact_service):
    detail = ContactEnquiryDetail(contact_service)
    detail.load(9)
    contact_service.send_reply.return_value = failed("")

    outcome = detail.send_reply("Hello")

    assert outcome.message == "Failed to send reply"
    assert detail.reply_message == "Hello"
