"""
Tests for the admin HTTP surface.

The FastAPI app is built around a real ApiClient whose requests session
is replaced by a fake backend keyed by method and path.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from marketplace_admin.app.core.auth import AuthSession
from marketplace_admin.app.core.config import settings
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.main import create_app

from factories import make_response


class FakeBackend:
    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=None, status_code=200):
        self.routes[(method, path)] = (status_code, body)

    def __call__(self, method, url, **kwargs):
        path = url.replace("http://backend.test", "")
        self.calls.append((method, path, kwargs))
        status_code, body = self.routes.get((method, path), (404, {"message": "No route"}))
        return make_response(status_code, body, url)

    def calls_to(self, method, path):
        return [call for call in self.calls if call[0] == method and call[1] == path]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend, auth):
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = backend
    api_client = ApiClient(base_url="http://backend.test", auth=auth, session=session)
    return TestClient(create_app(api_client=api_client, auth=auth))


def pagination(total, page=1, limit=10):
    pages = -(-total // limit)
    return {"total": total, "page": page, "limit": limit, "totalPages": pages, "hasNextPage": page < pages}


def test_screens_require_login(backend, client, auth):
    auth.logout()

    response = client.get("/api/v1/users/")

    assert response.status_code == 401
    assert backend.calls == []


def test_login(backend, client, auth):
    auth.logout()
    backend.add(
        "POST",
        "/v2/auth/login-email",
        {"message": "Login successfully", "data": {"access_token": "fresh", "email": "admin@example.com"}},
    )

    response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "pw"})

    assert response.status_code == 200
    assert response.json()["authenticated"] is True
    assert auth.token == "fresh"


def test_login_rejected(backend, client, auth):
    auth.logout()
    backend.add("POST", "/v2/auth/login-email", {"message": "Invalid credentials"}, status_code=400)

    response = client.post("/api/v1/auth/login", json={"email": "admin@example.com", "password": "bad"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_backend_401_ends_the_session(backend, client, auth):
    backend.add("GET", "/v2/order", {"message": "jwt expired"}, status_code=401)

    first = client.get("/api/v1/orders/")
    second = client.get("/api/v1/orders/")

    assert first.json()["state"] == "errored"
    assert second.status_code == 401
    assert not auth.is_authenticated


def test_users_list_page(backend, client):
    backend.add(
        "GET",
        "/v2/user",
        {"data": [{"id": n} for n in range(11, 21)], "pagination": pagination(25, page=2)},
    )

    response = client.get("/api/v1/users/", params={"page": 2, "type": "seller"})

    body = response.json()
    assert response.status_code == 200
    assert body["state"] == "populated"
    assert body["pagination"]["totalPages"] == 3
    assert body["control"]["range_text"] == "11 to 20 of 25"
    params = backend.calls_to("GET", "/v2/user")[0][2]["params"]
    assert params == {"page": 2, "limit": 10, "type": "seller"}


def test_list_failure_is_reported_in_view(backend, client):
    backend.add("GET", "/v2/trustap-transactions", {"message": ""}, status_code=500)

    body = client.get("/api/v1/transactions/").json()

    assert body["state"] == "errored"
    assert body["items"] == []
    assert body["pagination"]["total"] == 0


def test_user_not_found(backend, client):
    backend.add("GET", "/v2/user/user-info", {"data": None})

    assert client.get("/api/v1/users/8").status_code == 404


def test_user_transactions_tab(backend, client):
    backend.add(
        "GET",
        "/v2/user/8/transactions",
        {"data": [{"id": n} for n in range(1, 24)], "pending_balance": 40},
    )

    body = client.get("/api/v1/users/8/tabs/transactions", params={"page": 3}).json()

    assert [item["id"] for item in body["items"]] == [21, 22, 23]
    assert body["pagination"]["hasNextPage"] is False
    assert body["label"] == "Transactions (23)"
    assert backend.calls_to("GET", "/v2/user/user-info") == []
    assert backend.calls_to("GET", "/v2/user/8/trustap") == []


def test_user_tab_unknown_name(backend, client):
    response = client.get("/api/v1/users/8/tabs/wishlist")

    assert response.status_code == 400
    assert backend.calls == []


def test_views_are_documented_in_openapi(client):
    schema = client.get("/openapi.json").json()

    def response_ref(path):
        content = schema["paths"][path]["get"]["responses"]["200"]["content"]
        return content["application/json"]["schema"]["$ref"].rsplit("/", 1)[-1]

    assert response_ref("/api/v1/users/").startswith("ListView")
    assert response_ref("/api/v1/users/{user_id}/tabs/{tab}").startswith("TabView")
    components = schema["components"]["schemas"]
    meta = next(body for name, body in components.items() if name.startswith("PaginationMeta"))
    assert "totalPages" in meta["properties"]


def test_update_user(backend, client):
    backend.add(
        "GET",
        "/v2/user/user-info",
        {"data": {"id": 8, "first_name": "Ann", "last_name": "Bell", "email": "ann@example.com"}},
    )
    backend.add("PATCH", "/v2/user/8", {"data": {"id": 8}, "message": "updated"})

    response = client.patch("/api/v1/users/8", json={"last_name": "Brown"})

    assert response.status_code == 200
    assert response.json()["redirect_to"] == "/users/8"
    sent = backend.calls_to("PATCH", "/v2/user/8")[0][2]["json"]
    assert sent == {"first_name": "Ann", "last_name": "Brown", "email": "ann@example.com"}


def test_update_user_validation(backend, client):
    backend.add("GET", "/v2/user/user-info", {"data": {"id": 8, "first_name": "Ann", "last_name": "Bell"}})

    response = client.patch("/api/v1/users/8", json={"first_name": ""})

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "First name is required"
    assert backend.calls_to("PATCH", "/v2/user/8") == []


def test_approve_return_request(backend, client):
    backend.add("GET", "/v2/chat/return-request/11", {"data": {"id": 11, "return_status": 1, "order": {"id": 42}}})
    backend.add("POST", "/v2/chat/approve-return-request/42", {"data": {}, "message": "ok"})

    response = client.post("/api/v1/return-requests/11/approve")

    assert response.status_code == 200
    assert response.json()["message"] == "Return request approved successfully"


def test_reply_to_enquiry(backend, client):
    backend.add("GET", "/v2/support/contact-enquiries/9", {"data": {"id": 9, "status": 1}})
    backend.add("POST", "/v2/support/contact-enquiries/9/reply", {"data": {"id": 1}})

    response = client.post("/api/v1/contact-enquiries/9/reply", json={"reply_message": "Sorted"})

    assert response.status_code == 200
    assert response.json()["message"] == "Reply sent successfully"
    assert len(backend.calls_to("GET", "/v2/support/contact-enquiries/9")) == 2


def test_dashboard(backend, client):
    backend.add("GET", "/v2/dashboard/stats", {"data": {"totalUsers": 3}})

    body = client.get("/api/v1/dashboard/").json()

    assert body["stats"]["totalUsers"] == 3
    assert body["stats"]["todayProducts"] == 0


def test_create_product(backend, client):
    backend.add("POST", "/v2/product/admin/add", {"data": {"id": 99}, "message": "created"})

    response = client.post(
        "/api/v1/products/",
        data={"user_id": "12", "title": "Bag", "description": "New", "price": "30", "brand_id": "4", "color_ids": "[1, 2]"},
        files=[("images", ("a.jpg", b"raw", "image/jpeg"))],
    )

    assert response.status_code == 200
    assert response.json()["redirect_to"] == "/users/12"
    files = backend.calls_to("POST", "/v2/product/admin/add")[0][2]["files"]
    assert ("user_id", (None, "12")) in files
    assert ("color_ids", (None, "[1, 2]")) in files
    assert ("images", ("a.jpg", b"raw", "image/jpeg")) in files


def test_create_product_rejects_blank_custom_brand(backend, client):
    response = client.post(
        "/api/v1/products/",
        data={"user_id": "12", "title": "Bag", "brand_id": "other"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Please enter a custom brand name"
    assert backend.calls_to("POST", "/v2/product/admin/add") == []


def test_create_product_rejects_third_color(backend, client):
    response = client.post(
        "/api/v1/products/",
        data={"user_id": "12", "title": "Bag", "color_ids": "[1, 2, 3]"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Maximum 2 colors allowed"


def test_delete_product(backend, client):
    backend.add("DELETE", "/v2/product", {"message": "Product removed"})

    response = client.delete("/api/v1/products/5")

    assert response.json() == {"message": "Product removed"}
    assert backend.calls_to("DELETE", "/v2/product")[0][2]["params"] == {"id": 5}


def test_bulk_upload(backend, client, monkeypatch):
    monkeypatch.setattr(settings, "bulk_upload_delay", 0)
    backend.add("POST", "/v2/product/admin/add", {"data": {"id": 1}})
    payload = json.dumps([{"title": "A", "images": ["a.jpg"]}, {"title": "B"}]).encode()

    response = client.post(
        "/api/v1/products/bulk",
        data={"user_id": "12"},
        files=[
            ("products_file", ("products.json", payload, "application/json")),
            ("images", ("a.jpg", b"raw", "image/jpeg")),
        ],
    )

    result = response.json()["result"]
    assert result["success_count"] == 2
    assert result["failed_count"] == 0
    assert len(backend.calls_to("POST", "/v2/product/admin/add")) == 2


def test_bulk_upload_without_user(backend, client):
    response = client.post(
        "/api/v1/products/bulk",
        files=[("products_file", ("products.json", b"[]", "application/json"))],
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Please enter a User ID"
