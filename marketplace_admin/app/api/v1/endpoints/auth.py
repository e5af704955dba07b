"""
Authentication endpoints.

Log the console in to the marketplace backend, log it out, and relay
password recovery requests.  The token obtained at login is kept by the
shared :class:`AuthSession` and persisted across restarts.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from marketplace_admin.app.api.deps import get_auth, get_client
from marketplace_admin.app.core.auth import AuthSession
from marketplace_admin.app.core.http import ApiClient
from marketplace_admin.app.schemas.auth import ForgotPasswordRequest, LoginRequest
from marketplace_admin.app.schemas.views import MessageRead
from marketplace_admin.app.services.auth_service import AuthService


router = APIRouter()


@router.post("/login")
def login(
    credentials: LoginRequest,
    auth: AuthSession = Depends(get_auth),
    client: ApiClient = Depends(get_client),
) -> dict:
    if not auth.login(AuthService(client), credentials.email, credentials.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=auth.error)
    return {"authenticated": True, "user": auth.user}


@router.post("/logout")
def logout(auth: AuthSession = Depends(get_auth)) -> dict:
    auth.logout()
    return {"authenticated": False}


@router.post("/forgot-password", response_model=MessageRead)
def forgot_password(payload: ForgotPasswordRequest, client: ApiClient = Depends(get_client)) -> dict:
    result = AuthService(client).forgot_password(payload.email)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error_message("Failed to send reset instructions"),
        )
    return {"message": result.message or "Password reset instructions sent"}
