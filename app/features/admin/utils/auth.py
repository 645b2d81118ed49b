from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.models.admin import AdminRole
from app.features.admin.schemas.auth import CurrentAdmin
from app.features.admin.services.auth import AdminAuthService
from app.features.admin.utils.tokens import decode_access_token
from app.platform.config import settings
from app.platform.db.session import get_db
from app.platform.exceptions import AccountDeactivated, PermissionDenied, TokenInvalidOrExpired
from app.platform.utils.clock import to_timestamp

# auto_error=False so a missing header is reported as 401 by us, not 403 by FastAPI
security = HTTPBearer(auto_error=False)


async def authenticate_access_token(token: str, db: AsyncSession) -> CurrentAdmin:
    """
    Verify an access token and re-check the account it names.

    Claims are not trusted on their own: the account must still exist, be
    active, and not have changed its password after the token was issued.
    """
    claims = decode_access_token(token)

    admin = await AdminAuthService(db).get_admin_by_id(claims.sub)
    if admin is None:
        raise TokenInvalidOrExpired("Admin account not found")

    if not admin.is_active:
        raise AccountDeactivated("Account is deactivated")

    if admin.password_changed_at and claims.issued_at < to_timestamp(admin.password_changed_at):
        raise TokenInvalidOrExpired("Password was changed. Please login again.")

    return CurrentAdmin(
        id=str(admin.id),
        email=admin.email,
        role=admin.role,
        issued_at=claims.issued_at,
    )


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> CurrentAdmin:
    if credentials is None or not credentials.credentials:
        raise TokenInvalidOrExpired("Authentication required. No token provided.")

    return await authenticate_access_token(credentials.credentials, db)


async def require_admin(current_admin: CurrentAdmin = Depends(get_current_admin)) -> CurrentAdmin:
    if current_admin.role not in (AdminRole.admin, AdminRole.superadmin):
        raise PermissionDenied("Access denied. Admin privileges required.")
    return current_admin


async def require_superadmin(current_admin: CurrentAdmin = Depends(get_current_admin)) -> CurrentAdmin:
    if not current_admin.is_super_admin:
        raise PermissionDenied("Access denied. Superadmin privileges required.")
    return current_admin


async def get_registrar(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Optional[CurrentAdmin]:
    """
    Who is allowed to call /auth/register.

    A bearer token, when sent, must belong to a superadmin. Without one,
    registration is only open while no admin exists yet (bootstrap) or when
    ALLOW_OPEN_REGISTRATION is set.
    """
    if credentials is not None and credentials.credentials:
        current_admin = await authenticate_access_token(credentials.credentials, db)
        return await require_superadmin(current_admin)

    if settings.ALLOW_OPEN_REGISTRATION:
        return None

    if await AdminAuthService(db).count_admins() == 0:
        return None

    raise TokenInvalidOrExpired("Authentication required. No token provided.")
