"""
ClipStream - Share trimmed YouTube clips
Main FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .routers import clips_router
from .services.clip_store import get_clip_store
from .utils.exceptions import ClipStreamError
from .utils.logger import setup_logger


settings = get_settings()

# Set up logging
logger = setup_logger(level=settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    store = get_clip_store()
    await store.initialize()

    logger.info("=" * 60)
    logger.info(f"{settings.app_name} v{settings.app_version}")
    logger.info("=" * 60)
    logger.info(f"Database: {store.db_path}")
    logger.info(f"Metadata timeout: {settings.metadata_timeout_seconds}s")
    logger.info(f"Page size: {settings.default_page_size} (max {settings.max_page_size})")

    if settings.jwt_secret == "change-me":
        logger.warning("[!] JWT_SECRET is the default value")
    if settings.debug:
        logger.warning("[!] Debug mode: internal error messages are returned to clients")

    logger.info("Server started successfully!")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Share trimmed YouTube clips, like them and comment on them",
    version=settings.app_version,
    lifespan=lifespan
)

cors_origins = settings.cors_allowed_origins or ["http://localhost:3000"]
cors_allow_credentials = "*" not in cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Global Exception Handlers
# ============================================================================

@app.exception_handler(ClipStreamError)
async def clipstream_exception_handler(request: Request, exc: ClipStreamError):
    """Handle all ClipStream custom exceptions"""
    if exc.status_code >= 500:
        logger.error(f"ClipStreamError [{exc.code}]: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} [{exc.code}]: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg', 'Invalid request')}" if location else first.get("msg", "Invalid request")
    logger.warning(f"Validation error: {message}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": message,
            "recoverable": True,
            "recovery_hint": "Check your input parameters and try again.",
            "details": {"errors": [
                {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
                for error in errors
            ]}
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions"""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": str(exc) if settings.debug else "Server error",
            "recoverable": True,
            "recovery_hint": "If this persists, check the server logs for details."
        }
    )


# Include routers
app.include_router(clips_router)


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name} API", "docs": "/docs"}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy", "app": settings.app_name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clipstream.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
