from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Body, Cookie, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.schemas.auth import (
    AdminAuthResponse,
    AdminLoginRequest,
    AdminPasswordChangeRequest,
    AdminRegistrationRequest,
    AdminStatusUpdateRequest,
    CurrentAdmin,
    RefreshTokenRequest,
    TokenResponse,
)
from app.features.admin.services.auth import AdminAuthService
from app.features.admin.utils.auth import get_current_admin, get_registrar, require_superadmin
from app.platform.db.session import get_db
from app.platform.exceptions import NotFound
from app.platform.response import api_response

router = APIRouter(prefix="/auth", tags=["Admin - Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new admin",
)
async def register_admin(
    admin_data: AdminRegistrationRequest,
    registrar: Optional[CurrentAdmin] = Depends(get_registrar),
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new admin account.

    Open while no admin exists yet; afterwards only superadmins can create admins.
    """
    auth_service = AdminAuthService(db)

    admin = await auth_service.create_admin(
        admin_data=admin_data, created_by=registrar.id if registrar else None
    )

    return api_response(
        data=auth_service.admin_to_response(admin),
        message="Admin registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login as admin",
)
async def login_admin(login_data: AdminLoginRequest, db: AsyncSession = Depends(get_db)):
    """
    Authenticate an admin and return an access/refresh token pair.
    """
    auth_service = AdminAuthService(db)

    admin, tokens = await auth_service.login_admin(login_data.email, login_data.password)

    return api_response(
        data=AdminAuthResponse(admin=auth_service.admin_to_response(admin), **asdict(tokens)),
        message="Login successful",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout admin",
)
async def logout_admin(
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Revoke the stored refresh token. The access token simply expires.
    """
    await AdminAuthService(db).logout_admin(current_admin.id)

    return api_response(
        data={},
        message="Logout successful",
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    summary="Rotate the token pair",
)
async def refresh_tokens(
    payload: Optional[RefreshTokenRequest] = Body(None),
    refresh_token_cookie: Optional[str] = Cookie(None, alias="refresh_token"),
    db: AsyncSession = Depends(get_db),
):
    """
    Exchange the current refresh token (cookie or body) for a new pair.
    The presented token stops working once this succeeds.
    """
    presented = refresh_token_cookie or (payload.refresh_token if payload else None)

    _, tokens = await AdminAuthService(db).refresh_tokens(presented)

    return api_response(
        data=TokenResponse(**asdict(tokens)),
        message="Token refreshed successfully",
        status_code=status.HTTP_200_OK,
    )


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current admin profile",
)
async def get_current_admin_profile(
    current_admin: CurrentAdmin = Depends(get_current_admin), db: AsyncSession = Depends(get_db)
):
    auth_service = AdminAuthService(db)
    admin = await auth_service.get_admin_by_id(current_admin.id)

    if not admin:
        raise NotFound("Admin not found")

    return api_response(
        data=auth_service.admin_to_response(admin),
        message="Admin profile retrieved successfully",
        status_code=status.HTTP_200_OK,
    )


@router.put(
    "/change-password",
    status_code=status.HTTP_200_OK,
    summary="Change admin password",
)
async def change_admin_password(
    password_data: AdminPasswordChangeRequest,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Change the current admin's password. Every session must log in again.
    """
    await AdminAuthService(db).change_password(
        admin_id=current_admin.id,
        current_password=password_data.current_password,
        new_password=password_data.new_password,
    )

    return api_response(
        data={},
        message="Password changed successfully. Please login again.",
        status_code=status.HTTP_200_OK,
    )


@router.get(
    "/admins",
    status_code=status.HTTP_200_OK,
    summary="List admin accounts (superadmin only)",
)
async def list_admins(
    current_admin: CurrentAdmin = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db),
):
    auth_service = AdminAuthService(db)
    admins = await auth_service.list_admins()

    return api_response(
        data=[auth_service.admin_to_response(admin) for admin in admins],
        message="Admins retrieved successfully",
        status_code=status.HTTP_200_OK,
    )


@router.patch(
    "/admins/{admin_id}/status",
    status_code=status.HTTP_200_OK,
    summary="Activate or deactivate an admin (superadmin only)",
)
async def update_admin_status(
    admin_id: str,
    status_data: AdminStatusUpdateRequest,
    current_admin: CurrentAdmin = Depends(require_superadmin),
    db: AsyncSession = Depends(get_db),
):
    auth_service = AdminAuthService(db)
    admin = await auth_service.set_active(admin_id, status_data.is_active, actor_id=current_admin.id)

    return api_response(
        data=auth_service.admin_to_response(admin),
        message="Admin status updated successfully",
        status_code=status.HTTP_200_OK,
    )
