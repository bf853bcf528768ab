from fastapi import APIRouter

from korat.features.audit.routes.audit import router as audit_router
from korat.features.health.routes.health import router as health_router

api_router = APIRouter()

api_router.include_router(audit_router)
api_router.include_router(health_router)
