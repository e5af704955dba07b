"""Login and password recovery endpoints."""

from ..core.http import ApiClient
from ..schemas.common import ApiResult


class AuthService:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def login(self, email: str, password: str) -> ApiResult:
        return self.client.post("/v2/auth/login-email", {"email": email, "password": password})

    def forgot_password(self, email: str) -> ApiResult:
        return self.client.post("/v2/auth/forgot-password", {"email": email})
