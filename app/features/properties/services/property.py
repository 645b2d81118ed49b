from typing import List, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.properties.models.property import Property
from app.features.properties.schemas.property import PropertyCreate, PropertyUpdate
from app.platform.exceptions import NotFound
from app.platform.logger import get_logger

logger = get_logger(__name__)


async def list_properties(db: AsyncSession, page: int = 1, limit: int = 10) -> Tuple[List[Property], int]:
    """Newest first, with the total count for pagination."""
    total = await db.scalar(select(func.count(Property.id))) or 0
    result = await db.execute(
        select(Property)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    return list(result.scalars().all()), total


async def get_properties_by_ids(db: AsyncSession, property_ids: Sequence[str]) -> List[Property]:
    """Fetch properties keeping the order of ``property_ids``; unknown ids are skipped."""
    if not property_ids:
        return []
    result = await db.execute(select(Property).where(Property.id.in_(property_ids)))
    by_id = {p.id: p for p in result.scalars().all()}
    return [by_id[pid] for pid in property_ids if pid in by_id]


async def get_property(db: AsyncSession, property_id: str) -> Property:
    prop = await db.get(Property, property_id)
    if not prop:
        raise NotFound("Property not found")
    return prop


async def create_property(db: AsyncSession, data: PropertyCreate) -> Property:
    prop = Property(title=data.title, address=data.address, images=list(data.images))
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    logger.info(f"Property created: {prop.id}")
    return prop


async def update_property(db: AsyncSession, property_id: str, data: PropertyUpdate) -> Property:
    prop = await get_property(db, property_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(prop, field, value)

    await db.commit()
    await db.refresh(prop)
    return prop


async def delete_property(db: AsyncSession, property_id: str) -> None:
    prop = await get_property(db, property_id)
    await db.delete(prop)
    await db.commit()
    logger.info(f"Property deleted: {property_id}")


async def remove_property_image(db: AsyncSession, property_id: str, filename: str) -> Property:
    prop = await get_property(db, property_id)

    images = list(prop.images or [])
    if filename not in images:
        raise NotFound("Image not found")

    images.remove(filename)
    # Reassign so the JSON column is flagged dirty
    prop.images = images
    await db.commit()
    await db.refresh(prop)
    return prop
