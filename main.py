"""
Main FastAPI application entry point.
"""

from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import engine, Base
from app.core.exceptions import UpstreamServiceError
from app.routers import api_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the admins and vehicles tables exist
    Base.metadata.create_all(bind=engine)
    logger.info(f"🚀 {settings.app_name} started ({settings.ENVIRONMENT})")

    yield

    logger.info("🛑 Application shutdown")


# Create FastAPI app with lifespan
app = FastAPI(
    title=settings.app_name,
    description="API for managing vehicle inventory with AI-powered descriptions",
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


# Catch anything the routers did not turn into an HTTP error
@app.middleware("http")
async def handle_unexpected_errors(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        # Log the full error for debugging
        logger.error(f"Request failed: {request.method} {request.url.path}: {str(e)}", exc_info=True)

        # Return detailed error in development, generic in production
        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": str(e),
                    "error_type": type(e).__name__
                }
            )
        else:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Internal server error"}
            )


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with detailed messages"""
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = " -> ".join(str(x) for x in error["loc"])
        message = error["msg"]
        error_type = error["type"]
        error_messages.append(f"{field}: {message} (type: {error_type})")

    logger.error(f"Validation error: {error_messages}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation Error",
            "errors": error_messages,
            "raw_errors": jsonable_encoder(errors) if settings.debug else None
        }
    )


@app.exception_handler(UpstreamServiceError)
async def upstream_exception_handler(request: Request, exc: UpstreamServiceError):
    """Storage or text generation failures that reached the framework"""
    logger.error(f"Upstream service error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)}
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    """Root endpoint for health check."""
    return {
        "status": "ok",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )
