from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.models.admin import Admin, AdminRole
from app.features.admin.schemas.auth import AdminRegistrationRequest
from app.features.admin.services.auth import AdminAuthService
from app.platform.logger import get_logger

logger = get_logger(__name__)


async def create_super_admin_programmatically(
    db: AsyncSession, email: str, password: str, name: str = "Super Admin"
) -> Admin:
    """
    Create a super admin programmatically.
    This bypasses the HTTP registration flow and should only be used
    for initial setup or emergency admin creation.

    Args:
        db: Database session
        email: Admin email
        password: Admin password, checked against the password policy
        name: Display name

    Returns:
        Created admin object

    Raises:
        pydantic.ValidationError: invalid email, name or weak password
        DuplicateAccount: an admin with this email already exists
    """
    admin_data = AdminRegistrationRequest(
        email=email,
        password=password,
        confirm_password=password,
        name=name,
        role=AdminRole.superadmin,
    )
    return await AdminAuthService(db).create_admin(admin_data, created_by=None)


async def create_first_super_admin_if_none_exists(
    db: AsyncSession, email: str, password: str, name: str = "Super Admin"
) -> bool:
    """
    Create a first super admin if no admin exists.

    Returns:
        True if admin was created, False if admins already exist
    """
    admin_count = await db.scalar(select(func.count(Admin.id)))

    if admin_count and admin_count > 0:
        return False

    await create_super_admin_programmatically(db, email, password, name)
    logger.info(f"Bootstrapped first super admin {email.lower()}")
    return True
