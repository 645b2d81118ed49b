import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Text

from app.platform.db.base import BaseModel


class AdminRole(str, enum.Enum):
    admin = "admin"
    superadmin = "superadmin"


class Admin(BaseModel):
    __tablename__ = "admins"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)

    role = Column(Enum(AdminRole, name="admin_role"), default=AdminRole.admin, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Lockout
    login_attempts = Column(Integer, default=0, nullable=False)
    lock_until = Column(DateTime, nullable=True)

    # Session
    refresh_token = Column(Text, nullable=True)
    last_login = Column(DateTime, nullable=True)
    password_changed_at = Column(DateTime, nullable=True)

    created_by = Column(String, nullable=True)

    def __repr__(self):
        return f"<Admin(id={self.id}, email={self.email}, role={self.role}, is_active={self.is_active})>"
