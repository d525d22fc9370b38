import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core import config
from app.core.logging_config import setup_logging, sanitize_log_data
from app.db.init_db import init_db
from app.services.storage_service import get_storage

# ✅ Import All API Routes
from app.api.routes import admin, analysis, auth, extraction, health, jobs

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    logger.info(f"Starting HireScreen API with settings: {sanitize_log_data(config.as_dict())}")
    init_db()
    get_storage().ensure_buckets()
    if not config.LLM_API_KEY:
        logger.warning("No LLM API key configured - resume analysis requests will fail")
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="HireScreen API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(jobs.router)
app.include_router(extraction.router)
app.include_router(analysis.router)
app.include_router(auth.router)
app.include_router(admin.router)

# Stored job descriptions and resumes, served at their public URLs
app.mount("/storage", StaticFiles(directory=config.STORAGE_DIR, check_dir=False), name="storage")


# ============================================
# ✅ ROOT ENDPOINT
# ============================================

@app.get("/")
def root():
    return {"status": "HireScreen API running"}
