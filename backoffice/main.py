"""
Backoffice - API
Admin panel and storefront endpoints over the catalog and orders database
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from backoffice.api import categories, dashboard, orders, products, storefront  # noqa: E402
from backoffice.core.config import settings  # noqa: E402
from backoffice.core.database import init_db, wait_for_database  # noqa: E402
from backoffice.core.logging_config import setup_logging  # noqa: E402

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wait for the database (transient failure retry) and create missing tables"""
    latency_ms = wait_for_database()
    logger.info(f"Database reachable ({latency_ms} ms)")
    init_db()
    yield


# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Admin panel
app.include_router(dashboard.router, prefix="/api/v1/admin/dashboard", tags=["Admin Dashboard"])
app.include_router(products.router, prefix="/api/v1/admin/products", tags=["Admin Products"])
app.include_router(categories.router, prefix="/api/v1/admin/categories", tags=["Admin Categories"])
app.include_router(orders.router, prefix="/api/v1/admin/orders", tags=["Admin Orders"])

# Storefront
app.include_router(storefront.router, prefix="/api/v1/store", tags=["Storefront"])


@app.get("/")
def root():
    """Endpoint raíz - Verificación de estado de la API"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION
    }


@app.get("/health")
def health():
    """Health check endpoint para monitoreo - tests database connectivity"""
    db_status = "unknown"
    db_latency_ms = None
    db_error = None

    try:
        # Single attempt: a health probe should not sit in backoff
        db_latency_ms = wait_for_database(max_retries=1)
        db_status = "connected"
    except SQLAlchemyError as e:
        db_status = "disconnected"
        db_error = str(e)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "service": "backoffice-api",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "latency_ms": db_latency_ms,
            "error": db_error
        }
    }
