"""
Tests for the backend HTTP client.

Covers:
- query parameter cleaning
- bearer token and URL joining
- multipart bodies
- error mapping and forced logout on 401
"""

import requests

from marketplace_admin.app.core.http import ApiClient, clean_params

from factories import make_response


def test_clean_params_drops_empty_sentinels():
    params = {"page": 2, "search": "", "type": None, "status": 0, "hidden": False, "q": "shoes", "flag": "0"}

    assert clean_params(params) == {"page": 2, "q": "shoes", "flag": "0"}


def test_get_sends_bearer_token_and_clean_params(api_client, http_session):
    http_session.request.return_value = make_response(200, {"data": [], "message": "ok"})

    result = api_client.get("/v2/user", page=1, limit=10, search="", type="")

    assert result.ok
    kwargs = http_session.request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["url"] == "http://backend.test/v2/user"
    assert kwargs["params"] == {"page": 1, "limit": 10}
    assert kwargs["headers"]["Authorization"] == "Bearer tok-123"


def test_request_without_token_has_no_authorization_header(http_session):
    client = ApiClient(base_url="http://backend.test", session=http_session)
    http_session.request.return_value = make_response(200, {"data": {}})

    client.get("/v2/dashboard/stats")

    assert "Authorization" not in http_session.request.call_args.kwargs["headers"]


def test_post_sends_json_body(api_client, http_session):
    http_session.request.return_value = make_response(200, {"data": {"id": 3}})

    result = api_client.post("/v2/auth/forgot-password", {"email": "a@b.c"})

    assert result.data == {"id": 3}
    assert http_session.request.call_args.kwargs["json"] == {"email": "a@b.c"}


def test_multipart_request_sends_text_fields_as_parts(api_client, http_session):
    http_session.request.return_value = make_response(200, {"data": {"id": 9}})

    api_client.request(
        "POST",
        "/v2/product/admin/add",
        form=[("title", "Bag"), ("color_ids", "[1, 2]")],
        files=[("images", ("a.jpg", b"raw", "image/jpeg"))],
    )

    files = http_session.request.call_args.kwargs["files"]
    assert files == [
        ("title", (None, "Bag")),
        ("color_ids", (None, "[1, 2]")),
        ("images", ("a.jpg", b"raw", "image/jpeg")),
    ]
    assert "json" not in http_session.request.call_args.kwargs


def test_empty_body_is_success_without_data(api_client, http_session):
    http_session.request.return_value = make_response(204)

    result = api_client.delete("/v2/product", id=4)

    assert result.ok
    assert result.body is None
    assert result.data is None
    assert http_session.request.call_args.kwargs["params"] == {"id": 4}


def test_http_error_uses_backend_message(api_client, http_session):
    http_session.request.return_value = make_response(422, {"message": "Price is required"})

    result = api_client.post("/v2/order", {})

    assert not result.ok
    assert result.error.message == "Price is required"
    assert result.error.status_code == 422


def test_http_error_falls_back_to_detail(api_client, http_session):
    http_session.request.return_value = make_response(404, {"detail": "Not here"})

    result = api_client.get("/v2/order/1")

    assert result.error.message == "Not here"
    assert result.error.status_code == 404


def test_unauthorized_response_logs_out(api_client, http_session, auth, token_store):
    http_session.request.return_value = make_response(401, {"message": "Token expired"})
    hook_calls = []
    auth.add_logout_hook(lambda: hook_calls.append(True))

    result = api_client.get("/v2/user")

    assert result.error.status_code == 401
    assert not auth.is_authenticated
    assert token_store.load() == (None, None)
    assert hook_calls == [True]


def test_invalid_json_is_reported(api_client, http_session):
    response = make_response(200)
    response._content = b"<html>oops</html>"
    http_session.request.return_value = response

    result = api_client.get("/v2/user")

    assert result.error.message == "Invalid response from server"
    assert result.error.status_code is None


def test_transport_failure_is_reported(api_client, http_session):
    http_session.request.side_effect = requests.ConnectionError("connection refused")

    result = api_client.get("/v2/user")

    assert not result.ok
    assert "connection refused" in result.error.message
    assert result.error.status_code is None
