import pytest
from pydantic import ValidationError

from app.features.admin.models.admin import AdminRole
from app.features.admin.utils.admin_creator import (
    create_first_super_admin_if_none_exists,
    create_super_admin_programmatically,
)
from app.platform.exceptions import DuplicateAccount


@pytest.mark.asyncio
async def test_create_super_admin(app, login):
    async with app.state.sessionmaker() as db:
        admin = await create_super_admin_programmatically(db, "Boss@Example.com", "Str0ng!Pass")

    assert admin.email == "boss@example.com"
    assert admin.role == AdminRole.superadmin
    assert admin.password_hash != "Str0ng!Pass"
    assert (await login("boss@example.com")).status_code == 200


@pytest.mark.asyncio
async def test_create_super_admin_rejects_weak_password(app):
    async with app.state.sessionmaker() as db:
        with pytest.raises(ValidationError):
            await create_super_admin_programmatically(db, "boss@example.com", "password")


@pytest.mark.asyncio
async def test_create_super_admin_rejects_duplicate(app):
    async with app.state.sessionmaker() as db:
        await create_super_admin_programmatically(db, "boss@example.com", "Str0ng!Pass")
        with pytest.raises(DuplicateAccount):
            await create_super_admin_programmatically(db, "boss@example.com", "Str0ng!Pass")


@pytest.mark.asyncio
async def test_bootstrap_only_when_empty(app):
    async with app.state.sessionmaker() as db:
        assert await create_first_super_admin_if_none_exists(db, "boss@example.com", "Str0ng!Pass") is True
        assert await create_first_super_admin_if_none_exists(db, "second@example.com", "Str0ng!Pass") is False
