from fastapi import APIRouter
from app.features.admin.routes.auth import router as auth_router


router = APIRouter()

router.include_router(auth_router)
