from typing import Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.content.models.content import AboutContent, HomeContent
from app.features.content.schemas.content import (
    AboutResponse,
    AboutUpdateRequest,
    HomeResponse,
    HomeUpdateRequest,
)
from app.features.properties.schemas.property import PropertyResponse
from app.features.properties.services.property import get_properties_by_ids
from app.platform.logger import get_logger

logger = get_logger(__name__)

ContentModel = TypeVar("ContentModel", HomeContent, AboutContent)


async def _get_or_create(db: AsyncSession, model: Type[ContentModel]) -> ContentModel:
    result = await db.execute(select(model).order_by(model.created_at).limit(1))
    row = result.scalar_one_or_none()
    if row is None:
        row = model()
        db.add(row)
        await db.commit()
        await db.refresh(row)
        logger.info(f"Created default {model.__tablename__} row")
    return row


def _apply_update(row, data) -> None:
    for field, value in data.model_dump(exclude_unset=True, mode="json").items():
        # Lists are stored as JSON arrays and never null
        if value is None and isinstance(getattr(row, field), list):
            value = []
        setattr(row, field, value)


async def _build_home_response(db: AsyncSession, home: HomeContent) -> HomeResponse:
    featured = await get_properties_by_ids(db, home.featured_property_ids or [])
    response = HomeResponse.model_validate(home)
    response.featured_properties = [PropertyResponse.model_validate(p) for p in featured]
    return response


async def get_home(db: AsyncSession) -> HomeResponse:
    home = await _get_or_create(db, HomeContent)
    return await _build_home_response(db, home)


async def update_home(db: AsyncSession, data: HomeUpdateRequest) -> HomeResponse:
    home = await _get_or_create(db, HomeContent)

    _apply_update(home, data)

    await db.commit()
    await db.refresh(home)
    logger.info("Home content updated")
    return await _build_home_response(db, home)


async def get_about(db: AsyncSession) -> AboutResponse:
    about = await _get_or_create(db, AboutContent)
    return AboutResponse.model_validate(about)


async def update_about(db: AsyncSession, data: AboutUpdateRequest) -> AboutResponse:
    about = await _get_or_create(db, AboutContent)

    _apply_update(about, data)

    await db.commit()
    await db.refresh(about)
    logger.info("About content updated")
    return AboutResponse.model_validate(about)
