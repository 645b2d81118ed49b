from .auth import (
    AdminAuthResponse,
    AdminLoginRequest,
    AdminPasswordChangeRequest,
    AdminRegistrationRequest,
    AdminResponse,
    AdminStatusUpdateRequest,
    CurrentAdmin,
    RefreshTokenRequest,
    TokenResponse,
)

__all__ = [
    "AdminRegistrationRequest",
    "AdminLoginRequest",
    "AdminResponse",
    "AdminAuthResponse",
    "AdminPasswordChangeRequest",
    "AdminStatusUpdateRequest",
    "CurrentAdmin",
    "RefreshTokenRequest",
    "TokenResponse",
]
