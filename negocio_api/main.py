"""
Main FastAPI Application

Entry point for the multi-tenant negocios API.
Configures middleware, routes, error handlers, and startup/shutdown events.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from datetime import datetime
import time
from contextlib import asynccontextmanager

from negocio_api import __version__
from negocio_api.config import get_settings
from negocio_api.database import engine, init_db
from negocio_api.middleware.tenant import TenantContextMiddleware
from negocio_api.middleware.rate_limit import RateLimitMiddleware
from negocio_api.utils.logging import setup_logging, get_logger

from negocio_api.api.endpoints import super_admin, auth, content, tenant_config, media, resources

settings = get_settings()

setup_logging(
    log_level=settings.LOG_LEVEL,
    json_format=(settings.ENVIRONMENT == "production")
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Creates missing tables on startup and disposes of the engine on shutdown.
    """
    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    init_db()
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    engine.dispose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="API Multi-tenant de Negocios",
    description="Negocios, catálogo y pedidos aislados por negocio",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# ============================================================================
# MIDDLEWARE CONFIGURATION
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Super-Admin-Key"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add X-Process-Time header to track request duration."""
    start_time = time.time()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(time.time() - start_time)
    return response


# Starlette runs the last-added middleware first: the tenant context must
# be in place before the rate limiter reads it.
if settings.RATE_LIMIT_ENABLED:
    app.add_middleware(RateLimitMiddleware)
app.add_middleware(TenantContextMiddleware)


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed input is a 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "type": "validation_error"}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler.

    SECURITY: Internal errors (including database failures) are logged in
    full but only described to the client when DEBUG is on.
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
            "tenant_id": getattr(request.state, "tenant_id", None)
        }
    )

    if settings.DEBUG:
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc), "type": type(exc).__name__}
        )
    return JSONResponse(
        status_code=500,
        content={"detail": "Error interno del servidor", "type": "internal_error"}
    )


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "API Multi-tenant funcionando",
        "version": __version__,
        "docs": "/docs",
        "endpoints": [
            "POST /api/super-admin/negocios",
            "GET /api/super-admin/negocios",
            "POST /api/auth/login",
            "GET /api/{negocioID}/config",
            "GET /api/{negocioID}/secciones",
            "POST /api/{negocioID}/brief",
            "POST /api/{negocioID}/upload-imagen",
            "GET /api/{negocioID}/{productos|servicios|testimonios|casos-exito|galeria|pedidos}",
            "POST /api/ia/generar-texto",
        ]
    }


# Fixed routers first: /api/{negocio_id}/{kind} would otherwise match them
app.include_router(super_admin.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(content.router, prefix="/api")
app.include_router(tenant_config.router, prefix="/api")
app.include_router(media.router, prefix="/api")
app.include_router(resources.router, prefix="/api")

if settings.BLOB_BACKEND == "local":
    Path(settings.LOCAL_MEDIA_DIR).mkdir(parents=True, exist_ok=True)
    app.mount("/media", StaticFiles(directory=settings.LOCAL_MEDIA_DIR), name="media")


if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 80)
    logger.info("API Multi-tenant de Negocios")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug: {settings.DEBUG}")
    logger.info(f"Blob backend: {settings.BLOB_BACKEND}")
    logger.info("=" * 80)

    uvicorn.run(
        "negocio_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
