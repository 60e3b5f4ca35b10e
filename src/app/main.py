"""Snake Detector – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from src.app.config import settings
from src.app.errors import InputError, UpstreamError
from src.app.router import analyze, health

# Configure logging from settings
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Lifespan: report configuration on startup
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "🚀 Snake Detector starting (model=%s, schema=%s)",
        settings.vision_model, settings.schema_version,
    )
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set – every analysis will fail with 500.")
    yield
    logger.info("🛑 Shutting down.")


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
app = FastAPI(
    title="Snake Detector API",
    description="Identify snakes in photographs with a vision-capable model.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS middleware (configured from environment variables) ──
app.add_middleware(
    middleware_class=CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_methods_list,
    allow_headers=settings.cors_headers_list,
)

logger.info("CORS configured with origins: %s", settings.cors_origins_list)


# ── error bodies are {"error": message} ──
@app.exception_handler(InputError)
async def input_error_handler(_request: Request, exc: InputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(_request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Undecodable JSON is a 500; any other body without a usable image is a 400."""
    errors = exc.errors()
    json_errors = [err for err in errors if err.get("type") == "json_invalid"]
    if json_errors:
        message = json_errors[0].get("ctx", {}).get("error") or json_errors[0].get("msg")
        logger.warning("Undecodable request body: %s", message)
        return JSONResponse(status_code=500, content={"error": f"Invalid JSON body: {message}"})
    logger.info("Rejected analysis request: %s", errors)
    return JSONResponse(status_code=400, content={"error": "No image provided"})


# ── register routers ──
app.get('/')(lambda: {"message": "Welcome to the Snake Detector API! Visit /docs for API documentation."})
app.include_router(health.router)
app.include_router(analyze.router)
