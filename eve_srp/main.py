"""FastAPI application entry point"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from eve_srp.api import admin, approvals, health, losses, srp, tokens
from eve_srp.clients import EveSsoClient, ZKillboardLossSource
from eve_srp.config import settings
from eve_srp.database import init_db
from eve_srp.errors import SrpError
from eve_srp.middleware.rate_limit import limiter
from eve_srp.utils.logger import logger, setup_logging

# Setup logging
setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    init_db()
    app.state.eve_client = EveSsoClient(settings)
    app.state.loss_source = ZKillboardLossSource(settings)

    logger.info("EVE SRP backend starting up", extra={"action": "startup"})
    logger.info(f"Target corporation id: {settings.TARGET_CORP_ID}")
    if not settings.super_admin_enabled:
        logger.warning("SUPER_ADMIN_PASSWORD not set - super admin login is disabled")
    if settings.JWT_SECRET == "change-me-in-production":
        logger.warning("JWT_SECRET is the built-in default - set it in .env before deploying")

    yield

    # Shutdown
    app.state.eve_client.close()
    app.state.loss_source.close()
    logger.info("EVE SRP backend shutting down", extra={"action": "shutdown"})


# Create FastAPI app
app = FastAPI(
    title="EVE SRP",
    description="Ship Replacement Program: loss reimbursement requests and admin review",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ===== Middleware Setup =====

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Monitoring middleware
if settings.METRICS_ENABLED:
    from eve_srp.middleware.monitoring import MonitoringMiddleware
    app.add_middleware(MonitoringMiddleware)

    # Prometheus metrics
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics", "/health", "/health/ready", "/health/live"],
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=settings.METRICS_PATH, include_in_schema=False)

# Rate limiting
app.state.limiter = limiter

# ===== Route Setup =====

app.include_router(health.router)
app.include_router(tokens.router, prefix=settings.API_PREFIX)
app.include_router(losses.router, prefix=settings.API_PREFIX)
app.include_router(srp.router, prefix=settings.API_PREFIX)
app.include_router(approvals.router, prefix=settings.API_PREFIX)
app.include_router(admin.router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": "EVE SRP",
        "version": "0.1.0",
        "status": "operational",
        "api": settings.API_PREFIX,
        "docs": "/docs",
        "health": "/health",
    }


# ===== Error Handlers =====

def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details:
        body["details"] = list(details)
    return body


@app.exception_handler(SrpError)
async def srp_error_handler(request: Request, exc: SrpError):
    """Render domain errors as {error, details?}"""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers,
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors"""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown"
        }
    )
    return JSONResponse(
        status_code=429,
        content=_error_body("Too many requests. Please try again later."),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400 with one detail per offending field"""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content=_error_body("Invalid request", details))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework HTTP errors (unknown route, wrong method) in the same shape"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for uncaught errors"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method
        },
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred"),
    )
