"""
VoiceCRM Backend - Main Application Entry Point

Multi-tenant backend for voice-agent campaigns:
- Client, admin and human-agent accounts (JWT + Google sign-in)
- AI agent configuration and greeting audio (Sarvam TTS)
- Contact groups and time-windowed campaigns
- Inbound call-log reports and lead buckets
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from voicecrm.core.config import settings
from voicecrm.core.logging import setup_logging, get_logger
from voicecrm.core.exceptions import VoiceCrmException, AuthenticationError, DatabaseError
from voicecrm.api.routes import (
    health,
    superadmin,
    admin,
    client,
    client_settings,
    agents,
    voice,
    inbound,
    groups,
    campaigns,
    business_info,
    human_agents,
    bot,
    profile
)
from voicecrm.db import init_database, close_database

# Setup logging
setup_logging(
    level=settings.log_level,
    format_type=settings.log_format,
    service=settings.app_name,
    environment=settings.environment
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Starting VoiceCRM Backend")
    logger.info(f"Version: {settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    init_database()
    logger.info("Database initialized successfully")

    if not settings.google_audiences:
        logger.warning("No Google client ids configured; Google sign-in will reject every token")
    if not settings.sarvam_api_key:
        logger.warning("SARVAM_API_KEY not set; voice synthesis is unavailable")

    yield

    # Shutdown
    logger.info("Shutting down VoiceCRM Backend")
    await close_database()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="VoiceCRM API",
    description="""
    ## VoiceCRM Backend

    Accounts, AI voice agents, contact groups, campaigns and inbound call reporting.

    ### Authentication

    Send the JWT returned by any login endpoint as `Authorization: Bearer <token>`.
    Tokens carry a `userType` of `superadmin`, `admin`, `client` or `humanAgent`.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Configure CORS
cors_origins = settings.cors_origins
if settings.debug:
    cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests"""
    logger.debug(
        f"[REQUEST] {request.method} {request.url.path}",
        origin=request.headers.get("origin", "None")
    )
    response = await call_next(request)
    logger.debug(f"[RESPONSE] {response.status_code}", path=request.url.path)
    return response


# Custom Exception Handlers
@app.exception_handler(AuthenticationError)
async def auth_exception_handler(request: Request, exc: AuthenticationError):
    """Handle authentication errors"""
    logger.warning(f"AuthenticationError: {exc.message}", path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(VoiceCrmException)
async def voicecrm_exception_handler(request: Request, exc: VoiceCrmException):
    """Handle domain exceptions"""
    if exc.status_code >= 500:
        logger.error(f"VoiceCrmException: {exc.error_code} - {exc.message}", path=request.url.path)
    else:
        logger.warning(f"VoiceCrmException: {exc.error_code} - {exc.message}", path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are reported as 400 with per-field messages"""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    logger.warning("Request validation failed", path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "VALIDATION_ERROR",
            "message": "Validation failed",
            "errors": errors
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework HTTP errors (404 routes, 405 methods) in the common envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": "HTTP_ERROR",
            "message": exc.detail if isinstance(exc.detail, str) else "Request failed"
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Driver and ORM failures in the DatabaseError envelope"""
    logger.error(f"Database error: {exc}", exc_info=True, path=request.url.path)
    error = DatabaseError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            **({"details": {"exception": str(exc)}} if settings.debug else {})
        }
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(superadmin.router, prefix="/api/v1/superadmin", tags=["Superadmin"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(client.router, prefix="/api/v1/client", tags=["Client Accounts"])
app.include_router(client_settings.router, prefix="/api/v1/client", tags=["Client Settings"])
app.include_router(agents.router, prefix="/api/v1/client", tags=["Agents"])
app.include_router(voice.router, prefix="/api/v1/client", tags=["Voice"])
app.include_router(inbound.router, prefix="/api/v1/client", tags=["Inbound"])
app.include_router(groups.router, prefix="/api/v1/client", tags=["Groups"])
app.include_router(campaigns.router, prefix="/api/v1/client", tags=["Campaigns"])
app.include_router(business_info.router, prefix="/api/v1/client", tags=["Business Info"])
app.include_router(human_agents.router, prefix="/api/v1/client", tags=["Human Agents"])
app.include_router(bot.router, prefix="/api/v1/client", tags=["Bot"])
app.include_router(profile.router, prefix="/api/v1/auth/client/profile", tags=["Profile"])


# Root endpoint
@app.get("/", include_in_schema=False)
async def root():
    """API root endpoint"""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "superadmin": "/api/v1/superadmin",
            "admin": "/api/v1/admin",
            "client": "/api/v1/client",
            "profile": "/api/v1/auth/client/profile"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "voicecrm.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug
    )
