"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.api import auth, listings
from marketplace.api.dependencies import get_image_store
from marketplace.config import get_settings
from marketplace.database import engine, init_db
from marketplace.exceptions import MarketplaceError

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure the root logger once; later calls are no-ops."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging(settings.log_level)
    get_image_store().ensure_directory()
    if settings.auto_create_schema:
        await init_db()
    logger.info(f"Marketplace API started ({settings.environment})")
    yield
    await engine.dispose()


app = FastAPI(
    title="Listings Marketplace API",
    description="User accounts and a filterable marketplace of listings with image uploads",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    if exc.status_code >= 500:
        logger.exception(f"{request.method} {request.url.path} failed", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error.get("loc")})
    message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request"
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# Register routers
app.include_router(auth.router)
app.include_router(listings.router)

# Uploaded images; the directory is created during startup
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=get_image_store().directory, check_dir=False),
    name="uploads",
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
