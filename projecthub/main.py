from projecthub.core.env import load_env
load_env()
from projecthub.core.config import settings
# Initialize structured logging early
from projecthub.core.logging import configure_logging, get_logger
configure_logging(settings.LOG_LEVEL)

from contextlib import asynccontextmanager
import datetime
import time

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from projecthub.db.deps import get_db
from projecthub.integrations.storage import (
    BucketConfig,
    BucketProvisioner,
    ObjectStoreClient,
    StorageGateway,
    ensure_bucket_on_startup,
)
from projecthub.middleware.errors import register_exception_handlers
from projecthub.middleware.logging import logging_middleware

# Import routers from modules
from projecthub.modules.projects.routes import router as projects_router
from projecthub.modules.uploads.routes import router as upload_router
from projecthub.modules.users.routes import router as users_router

logger = get_logger(__name__)


def build_storage_gateway(config: BucketConfig) -> StorageGateway:
    client = ObjectStoreClient(config)
    return StorageGateway(config, client, BucketProvisioner(config, client))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_INIT_ON_STARTUP:
        from projecthub.db.init_db import create_database
        create_database()

    bucket_config = BucketConfig.from_settings(settings)
    gateway = build_storage_gateway(bucket_config)
    app.state.storage_gateway = gateway

    # Non-fatal: the API starts without object storage and uploads fall back
    if settings.STORAGE_ENSURE_ON_STARTUP:
        ensure_bucket_on_startup(gateway.provisioner)

    logger.info(
        "api process started",
        object_store=bucket_config.endpoint_url,
        bucket=bucket_config.bucket_name,
        public_url=bucket_config.public_base_url,
    )
    yield
    logger.info("api process stopping")


app = FastAPI(title="ProjectHub API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_origins_list != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(logging_middleware)
register_exception_handlers(app)

# Record process start time for uptime reporting
_START_TIME = time.time()

# Create main API router
api_router = APIRouter()
api_router.include_router(users_router)
api_router.include_router(projects_router)
api_router.include_router(upload_router)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
async def health():
    """Simple health endpoint returning status, uptime, and timestamp."""
    uptime = time.time() - _START_TIME
    payload = {
        "status": "ok",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    return JSONResponse(content=payload)


@app.get("/db/health")
def db_health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}
