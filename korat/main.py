import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from korat.api_routers.v1 import api_router
from korat.features.audit.models.audit import Audit  # noqa: F401  registers the table
from korat.features.health.routes.health import router as health_router
from korat.middlewares.cors import PermissiveCORSMiddleware
from korat.platform.config import settings
from korat.platform.db.session import create_tables
from korat.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Heuristic SEO, accessibility, technical and performance audits of a single page",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "Scored single-page audits with per-user history.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api/v1",
    }


app.add_middleware(PermissiveCORSMiddleware)
add_exception_handlers(app)

app.include_router(health_router)
app.include_router(api_router, prefix="/api/v1")
