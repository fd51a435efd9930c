"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usermanager.api import router as api_router
from usermanager.core.config import DEFAULT_JWT_SECRET, settings
from usermanager.core.errors import register_exception_handlers
from usermanager.core.middleware import BodySizeLimitMiddleware, SecurityHeadersMiddleware
from usermanager.core.ratelimit import AuthRateLimitMiddleware
from usermanager.core.seed import init_db
from usermanager.core.static import SpaStaticFiles
from usermanager.schemas.health import ApiInfoResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET:
        logger.warning("Using the built-in JWT_SECRET; set JWT_SECRET before deploying.")
    init_db()
    yield


app = FastAPI(
    title="User Manager API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)
register_exception_handlers(app)

# Innermost, inside CORS.
app.add_middleware(AuthRateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "x-auth-token", "CSRF-Token"],
)
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(api_router, prefix="/api")


@app.get("/api", response_model=ApiInfoResponse, tags=["meta"])
def api_info() -> ApiInfoResponse:
    """Discovery payload listing the API groups."""
    return ApiInfoResponse(
        message="User Management API is running",
        endpoints={"auth": "/api/auth", "users": "/api/users"},
    )


# Must stay last: the mount matches every path the routes above did not.
if Path(settings.STATIC_DIR).is_dir():
    app.mount("/", SpaStaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
