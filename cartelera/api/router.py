from fastapi import APIRouter

from cartelera.api.endpoints.health import router as health_router
from cartelera.api.endpoints.listings import router as listings_router


router = APIRouter(prefix="/api")
router.include_router(health_router, tags=["health"])
router.include_router(listings_router, tags=["Cartelera"])
