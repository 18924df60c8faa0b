"""
Main FastAPI application
Entry point for the CodeClash contest platform API
"""

from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from codeclash.core.config import Settings, get_settings
from codeclash.core.database import close_db, create_engine, create_session_factory, init_db
from codeclash.core.exceptions import CodeClashError
from codeclash.core.security import create_limiter, get_security_headers
from codeclash.services.judge_client import Judge0Client

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.INFO if not settings.DEBUG else logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# ============================================================================
# LIFESPAN CONTEXT MANAGER
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    logger.info("Starting CodeClash API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    if settings.DB_CREATE_TABLES:
        await init_db(engine)

    app.state.judge_client = Judge0Client.from_settings(settings)
    logger.info(f"Judge0 endpoint: {settings.JUDGE0_API_URL}")

    logger.info("Application startup complete")

    yield  # Application runs here

    # ==================== SHUTDOWN ====================
    logger.info("Shutting down CodeClash API")

    await app.state.judge_client.close()
    logger.info("Judge client closed")

    await close_db(engine)
    logger.info("Database connections closed")

    logger.info("Shutdown complete")


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

def _error_body(message: str, details=None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def codeclash_error_handler(request: Request, exc: CodeClashError):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    error_types = {err.get("type") for err in errors}

    if "json_invalid" in error_types:
        message = "Invalid JSON payload"
    elif error_types == {"missing"}:
        message = "Missing required fields"
    else:
        message = "Invalid request"

    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
        for err in errors
    ]
    return JSONResponse(status_code=400, content=_error_body(message, details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content=_error_body("Rate limit exceeded. Please try again later.")
    )


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    if request.app.state.settings.DEBUG:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": {"message": str(exc), "type": type(exc).__name__}
            }
        )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


# ============================================================================
# CREATE FASTAPI APP
# ============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Settings are validated here, once per process."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="CodeClash API",
        description="Coding contest platform: contests, judged submissions, leaderboards",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.limiter = create_limiter(settings)

    # ==================== MIDDLEWARE ====================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.middleware("http")
    async def log_and_secure(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        response = await call_next(request)
        for key, value in get_security_headers().items():
            response.headers[key] = value
        return response

    # ==================== EXCEPTION HANDLERS ====================

    app.add_exception_handler(CodeClashError, codeclash_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # ==================== ROOT ENDPOINTS ====================

    @app.get("/")
    async def root():
        return {
            "message": "CodeClash Backend is running",
            "version": "1.0.0",
            "status": "operational"
        }

    @app.get("/health")
    async def health_check(request: Request):
        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database = "up"
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            database = "down"

        return {
            "status": "healthy" if database == "up" else "degraded",
            "services": {"database": database}
        }

    # ==================== API ROUTES ====================

    from codeclash.api import auth, contests, questions, submissions

    app.include_router(
        auth.build_router(app.state.limiter, settings), prefix="/api", tags=["Authentication"]
    )
    app.include_router(contests.router, prefix="/api", tags=["Contests"])
    app.include_router(questions.router, prefix="/api", tags=["Questions"])
    app.include_router(submissions.router, prefix="/api", tags=["Submissions"])

    return app


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "codeclash.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
