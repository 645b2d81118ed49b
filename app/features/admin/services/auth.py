import hmac
from datetime import datetime
from typing import Callable, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.models.admin import Admin, AdminRole
from app.features.admin.schemas.auth import AdminRegistrationRequest, AdminResponse
from app.features.admin.utils import lockout
from app.features.admin.utils.passwords import hash_password, verify_password
from app.features.admin.utils.tokens import TokenPair, create_token_pair, decode_refresh_token
from app.platform.exceptions import (
    AccountDeactivated,
    AccountLocked,
    DuplicateAccount,
    InvalidCredentials,
    NotFound,
    TokenInvalidOrExpired,
    ValidationFailed,
)
from app.platform.logger import get_logger
from app.platform.utils.clock import utcnow

logger = get_logger(__name__)

_dummy_hash: Optional[str] = None


def _get_dummy_hash() -> str:
    # Compared against when the email is unknown so both paths cost one bcrypt check
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("Dummy-password-1!")
    return _dummy_hash


class AdminAuthService:
    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = utcnow,
        policy: Optional[lockout.LockoutPolicy] = None,
    ):
        self.db = db
        self.clock = clock
        self.policy = policy or lockout.LockoutPolicy.from_settings()

    # ── Password hashing (off the event loop) ──────────────────────────

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(hash_password, password)

    async def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        return await run_in_threadpool(verify_password, plain_password, hashed_password)

    async def set_password(self, admin: Admin, password: str) -> None:
        """The only place a password hash is written after creation."""
        admin.password_hash = await self.hash_password(password)
        admin.password_changed_at = self.clock()

    # ── Lookups ────────────────────────────────────────────────────────

    async def get_admin_by_email(self, email: str) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).where(Admin.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def get_admin_by_id(self, admin_id: str) -> Optional[Admin]:
        return await self.db.get(Admin, admin_id)

    async def count_admins(self) -> int:
        return await self.db.scalar(select(func.count(Admin.id))) or 0

    async def list_admins(self) -> List[Admin]:
        result = await self.db.execute(select(Admin).order_by(Admin.created_at.desc()))
        return list(result.scalars().all())

    # ── Registration ───────────────────────────────────────────────────

    async def create_admin(
        self, admin_data: AdminRegistrationRequest, created_by: Optional[str] = None
    ) -> Admin:
        existing_admin = await self.get_admin_by_email(admin_data.email)
        if existing_admin:
            raise DuplicateAccount()

        admin = Admin(
            email=admin_data.email.strip().lower(),
            password_hash=await self.hash_password(admin_data.password),
            name=admin_data.name,
            role=admin_data.role,
            is_active=True,
            login_attempts=0,
            created_by=created_by,
        )

        self.db.add(admin)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            await self.db.rollback()
            raise DuplicateAccount() from e
        await self.db.refresh(admin)

        logger.info(f"Admin registered: id={admin.id} role={admin.role.value} created_by={created_by}")
        return admin

    # ── Login / lockout ────────────────────────────────────────────────

    async def record_failed_login(self, admin: Admin) -> None:
        now = self.clock()
        transition = lockout.next_failure(admin.login_attempts or 0, admin.lock_until, now, self.policy)

        if transition.restart:
            values = {"login_attempts": 1, "lock_until": None}
        else:
            # Increment in the store so concurrent failures are not lost
            values = {"login_attempts": Admin.login_attempts + 1}
            if transition.locks_now:
                values["lock_until"] = transition.lock_until

        await self.db.execute(
            update(Admin)
            .where(Admin.id == admin.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        await self.db.refresh(admin)

        if transition.locks_now:
            logger.warning(
                f"Admin {admin.id} locked until {transition.lock_until.isoformat()} "
                f"after {admin.login_attempts} failed login attempts"
            )
        else:
            logger.warning(f"Failed login for admin {admin.id} (attempts={admin.login_attempts})")

    async def authenticate_admin(self, email: str, password: str) -> Admin:
        admin = await self.get_admin_by_email(email)
        if not admin:
            await self.verify_password(password, await run_in_threadpool(_get_dummy_hash))
            logger.warning("Failed login for unknown email")
            raise InvalidCredentials()

        if lockout.is_locked(admin.lock_until, self.clock()):
            logger.warning(f"Login rejected for locked admin {admin.id}")
            raise AccountLocked()

        if not admin.is_active:
            logger.warning(f"Login rejected for deactivated admin {admin.id}")
            raise AccountDeactivated()

        if not await self.verify_password(password, admin.password_hash):
            await self.record_failed_login(admin)
            raise InvalidCredentials()

        return admin

    async def login_admin(self, email: str, password: str) -> tuple[Admin, TokenPair]:
        admin = await self.authenticate_admin(email, password)

        if lockout.needs_reset(admin.login_attempts or 0, admin.lock_until):
            admin.login_attempts = 0
            admin.lock_until = None

        admin.last_login = self.clock()
        tokens = self._issue_tokens(admin)
        await self.db.commit()

        logger.info(f"Admin login successful: id={admin.id}")
        return admin, tokens

    # ── Tokens ─────────────────────────────────────────────────────────

    def _issue_tokens(self, admin: Admin) -> TokenPair:
        """Mint a pair and make its refresh token the only valid one for the account."""
        tokens = create_token_pair(str(admin.id), admin.email, AdminRole(admin.role).value)
        admin.refresh_token = tokens.refresh_token
        return tokens

    async def refresh_tokens(self, refresh_token: Optional[str]) -> tuple[Admin, TokenPair]:
        if not refresh_token:
            raise TokenInvalidOrExpired("Refresh token not provided")

        claims = decode_refresh_token(refresh_token)
        admin = await self.get_admin_by_id(claims.sub)

        if (
            admin is None
            or not admin.refresh_token
            or not hmac.compare_digest(admin.refresh_token, refresh_token)
        ):
            logger.warning(f"Rejected refresh token for subject {claims.sub}")
            raise TokenInvalidOrExpired("Invalid refresh token")

        if not admin.is_active:
            raise AccountDeactivated("Account is deactivated")

        tokens = self._issue_tokens(admin)
        await self.db.commit()

        logger.info(f"Tokens refreshed for admin {admin.id}")
        return admin, tokens

    async def logout_admin(self, admin_id: str) -> None:
        await self.db.execute(
            update(Admin)
            .where(Admin.id == admin_id)
            .values(refresh_token=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        logger.info(f"Admin logged out: id={admin_id}")

    # ── Account management ─────────────────────────────────────────────

    async def change_password(self, admin_id: str, current_password: str, new_password: str) -> None:
        admin = await self.get_admin_by_id(admin_id)
        if not admin:
            raise NotFound("Admin not found")

        if not await self.verify_password(current_password, admin.password_hash):
            raise InvalidCredentials("Current password is incorrect")

        await self.set_password(admin, new_password)
        # Force re-authentication everywhere
        admin.refresh_token = None
        await self.db.commit()

        logger.info(f"Password changed for admin {admin.id}")

    async def set_active(self, admin_id: str, is_active: bool, actor_id: str) -> Admin:
        admin = await self.get_admin_by_id(admin_id)
        if not admin:
            raise NotFound("Admin not found")

        if admin.id == actor_id and not is_active:
            raise ValidationFailed("You cannot deactivate your own account")

        admin.is_active = is_active
        await self.db.commit()
        await self.db.refresh(admin)

        logger.info(f"Admin {admin.id} {'activated' if is_active else 'deactivated'} by {actor_id}")
        return admin

    @staticmethod
    def admin_to_response(admin: Admin) -> AdminResponse:
        return AdminResponse.model_validate(admin)
