from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from api.records import build_record_router
from config.app_config import LOG_DIR, LOG_LEVEL
from dependencies import RECORD_DEFINITIONS, record_service_provider
from init_db import init_database
from utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    logger.info("Initializing database schema...")
    init_database()
    yield
    logger.info("Shutting down")


def create_app(log_dir=LOG_DIR) -> FastAPI:
    """
    Assemble the application: logging, CORS and one router per record kind.

    Args:
        log_dir: Directory for the rotating log file (None for console only)
    """
    setup_logging(LOG_LEVEL, log_dir)

    app = FastAPI(
        title="Record Service API",
        description="Generic CRUD and filtered listing over relational records",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for resource, definition in RECORD_DEFINITIONS.items():
        app.include_router(
            build_record_router(record_service_provider(resource), definition.dto_class),
            prefix=f"/api/{resource}",
            tags=[resource]
        )

    @app.get("/api/health")
    def health_check():
        return {"status": "healthy", "resources": sorted(RECORD_DEFINITIONS)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=False)
