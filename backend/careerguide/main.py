import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from datetime import datetime

from . import __version__
from .config import settings
from .api.routes import router, catalog_store
from .api.middleware import setup_middleware

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Career Guidance Engine...")

    try:
        catalog_store.load()
        if catalog_store.issues:
            logger.warning(f"Catalog loaded with {len(catalog_store.issues)} issues")
        logger.info("Career Guidance Engine ready")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("Shutting down...")

app = FastAPI(
    title="Career Guidance Engine",
    description="Personality assessment scoring and career recommendations",
    version=__version__,
    lifespan=lifespan
)

setup_middleware(app)

app.include_router(router, prefix="/api/v1", tags=["Career Guidance"])

@app.get("/")
async def root():
    return {
        "service": "Career Guidance Engine",
        "version": __version__,
        "docs": "/docs",
        "endpoints": [
            "GET /api/v1/assessment/questions",
            "POST /api/v1/assessment",
            "POST /api/v1/assessment/score",
            "POST /api/v1/recommendations",
            "GET /api/v1/careers",
            "GET /api/v1/health",
        ]
    }

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "timestamp": datetime.now().isoformat()
        }
    )
