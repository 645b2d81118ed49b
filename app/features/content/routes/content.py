from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.admin.schemas.auth import CurrentAdmin
from app.features.admin.utils.auth import require_admin
from app.features.content.schemas.content import AboutUpdateRequest, HomeUpdateRequest
from app.features.content.services import content as content_service
from app.platform.db.session import get_db
from app.platform.response import api_response

router = APIRouter(tags=["Content"])


@router.get("/home")
async def get_home(db: AsyncSession = Depends(get_db)):
    home = await content_service.get_home(db)
    return api_response(data=home, message="Home content retrieved successfully")


@router.put("/home/admin")
async def update_home(
    payload: HomeUpdateRequest,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    home = await content_service.update_home(db, payload)
    return api_response(data=home, message="Home content updated successfully")


@router.get("/about")
async def get_about(db: AsyncSession = Depends(get_db)):
    about = await content_service.get_about(db)
    return api_response(data=about, message="About content retrieved successfully")


@router.put("/about/admin")
async def update_about(
    payload: AboutUpdateRequest,
    current_admin: CurrentAdmin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    about = await content_service.update_about(db, payload)
    return api_response(data=about, message="About content updated successfully")
