from unittest.mock import MagicMock

import pytest
import requests

from marketplace_admin.app.core.auth import AuthSession, TokenStore
from marketplace_admin.app.core.http import ApiClient


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(tmp_path / "auth.json")


@pytest.fixture
def auth(token_store):
    session = AuthSession(token_store)
    session.set_credentials("tok-123", {"id": 1, "email": "admin@example.com"})
    return session


@pytest.fixture
def http_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api_client(http_session, auth):
    return ApiClient(base_url="http://backend.test/", auth=auth, session=http_session)
