import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ✅ Import All API Routes
from app.api.routes import auth, health, jobs, resources, seo
from app.core import config
from app.core.logging_config import setup_logging
from app.db.init_db import init_db
from app.db.session import StoreConnection

logger = logging.getLogger(__name__)


# ============================================
# ✅ STORE LIFECYCLE
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a missing or unreachable database is fatal
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    config.warn_on_default_secret()

    store = StoreConnection(config.require_database_url()).connect()
    init_db(store)
    app.state.store = store
    logger.info("Job board API started")

    yield

    # Shutdown
    store.close()
    app.state.store = None
    logger.info("Job board API stopped")


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Off-Campus Jobs API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(resources.router)
app.include_router(health.router)
app.include_router(seo.router)


@app.get("/")
def root():
    return {"status": "Off-Campus Jobs API running"}
