from fastapi import APIRouter

from app.features.admin.routes import router as admin_router
from app.features.contact.routes.contact import router as contact_router
from app.features.content.routes.content import router as content_router
from app.features.health.routes.health import router as health_router
from app.features.properties.routes.property import router as properties_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(admin_router)
api_router.include_router(properties_router)
api_router.include_router(contact_router)
api_router.include_router(content_router)
api_router.include_router(health_router)
