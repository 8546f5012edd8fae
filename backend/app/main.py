import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.config import get_settings
from app.database import dispose_engine, get_session_factory, init_models
from app.error_handlers import register_error_handlers
from app.logging_config import get_logger, setup_logging
from app.middleware.request_logging import RequestLoggingMiddleware
from app.routers import alerts, cases, uploads, water_tests
from app.routers import auth as auth_router
from app.seed import seed_sample_alerts

setup_logging()
logger = get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: an unreachable database is fatal, so errors here propagate.
    try:
        await init_models()
    except Exception:
        logger.exception("Could not initialize the database at startup")
        raise
    if settings.seed_sample_alerts:
        async with get_session_factory()() as session:
            await seed_sample_alerts(session)
    logger.info("Health Surveillance API started")
    yield
    # Shutdown
    await dispose_engine()


app = FastAPI(
    title="Health Surveillance API",
    description="Field reporting for community health workers: case reports, water tests and alerts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_error_handlers(app)

app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(cases.router, prefix="/api/cases", tags=["Cases"])
app.include_router(water_tests.router, prefix="/api/water-tests", tags=["Water Tests"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["Alerts"])
app.include_router(uploads.router, prefix="/api", tags=["Uploads"])

os.makedirs(settings.upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.get("/api/health")
async def health_check():
    return {"status": "OK", "message": "Health Surveillance API is running"}
