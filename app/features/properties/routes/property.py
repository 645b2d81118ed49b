from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.schemas.auth import CurrentAdmin
from app.features.admin.utils.auth import require_admin
from app.features.properties.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from app.features.properties.services import property as property_service
from app.platform.db.session import get_db
from app.platform.response import api_response
from app.platform.schemas import Pagination

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("", summary="List properties")
async def list_properties(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    properties, total = await property_service.list_properties(db, page=page, limit=limit)

    return api_response(
        data={
            "properties": [PropertyResponse.model_validate(p) for p in properties],
            "pagination": Pagination.build(page, limit, total),
        },
        message="Properties retrieved successfully",
    )


@router.get("/{property_id}", summary="Get a property")
async def get_property(property_id: str, db: AsyncSession = Depends(get_db)):
    prop = await property_service.get_property(db, property_id)

    return api_response(
        data=PropertyResponse.model_validate(prop),
        message="Property retrieved successfully",
    )


@router.post("/admin", status_code=status.HTTP_201_CREATED, summary="Create a property")
async def create_property(
    request: PropertyCreate,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    prop = await property_service.create_property(db, request)

    return api_response(
        data=PropertyResponse.model_validate(prop),
        message="Property created successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.put("/admin/{property_id}", summary="Update a property")
async def update_property(
    property_id: str,
    request: PropertyUpdate,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    prop = await property_service.update_property(db, property_id, request)

    return api_response(
        data=PropertyResponse.model_validate(prop),
        message="Property updated successfully",
    )


@router.delete("/admin/{property_id}", summary="Delete a property")
async def delete_property(
    property_id: str,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await property_service.delete_property(db, property_id)

    return api_response(data={}, message="Property deleted successfully")


@router.delete("/admin/{property_id}/images/{filename}", summary="Detach an image from a property")
async def delete_property_image(
    property_id: str,
    filename: str,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    prop = await property_service.remove_property_image(db, property_id, filename)

    return api_response(
        data=PropertyResponse.model_validate(prop),
        message="Image deleted successfully",
    )
