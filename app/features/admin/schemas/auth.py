from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.features.admin.models.admin import AdminRole
from app.features.admin.utils.passwords import validate_password_strength


class AdminRegistrationRequest(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str
    name: str = Field(..., min_length=2, max_length=50)
    role: AdminRole = AdminRole.admin

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "admin@example.com",
                "password": "Str0ng!Pass",
                "confirm_password": "Str0ng!Pass",
                "name": "Site Admin",
                "role": "admin",
            }
        }
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be between 2 and 50 characters")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def validate_confirm_password(cls, v: str, info) -> str:
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("Passwords do not match")
        return v


class AdminLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshTokenRequest(BaseModel):
    refresh_token: Optional[str] = None


class AdminPasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("confirm_password")
    @classmethod
    def validate_confirm_password(cls, v: str, info) -> str:
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return v


class AdminStatusUpdateRequest(BaseModel):
    is_active: bool


class AdminResponse(BaseModel):
    id: str
    email: str
    name: str
    role: AdminRole
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminAuthResponse(TokenResponse):
    admin: AdminResponse


class CurrentAdmin(BaseModel):
    """Identity attached to a request by the auth gate."""

    id: str
    email: str
    role: AdminRole
    issued_at: float

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.superadmin
