"""FastAPI application for truthcheck.

Logging: Uses structured JSON logging.
Set LOG_FORMAT=pretty for development-friendly output.

CORS:
  APP_ENV=production → https://www.truthcheck.me, https://truthcheck.me
  otherwise          → http://localhost:3000 (the frontend dev server)
  CORS_ORIGINS (comma-separated) overrides both.
"""

import os
from contextlib import asynccontextmanager

# Configure structured logging BEFORE importing anything else
from src.utils.logging import configure_logging, get_logger, log

configure_logging()

MODULE = "api"
logger = get_logger()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from src.api.routes.fact_check import TEXT_REQUIRED  # noqa: E402
from src.api.routes.fact_check import router as fact_check_router  # noqa: E402
from src.api.routes.health import VERSION  # noqa: E402
from src.api.routes.health import router as health_router  # noqa: E402
from src.llm.client import MODEL  # noqa: E402

APP_ENV = os.getenv("APP_ENV", "development")

PRODUCTION_ORIGINS = ["https://www.truthcheck.me", "https://truthcheck.me"]
DEVELOPMENT_ORIGINS = ["http://localhost:3000"]


def cors_origins() -> list[str]:
    override = os.getenv("CORS_ORIGINS")
    if override:
        return [o.strip() for o in override.split(",") if o.strip()]
    if APP_ENV == "production":
        return PRODUCTION_ORIGINS
    return DEVELOPMENT_ORIGINS


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown."""
    log.info(logger, MODULE, "startup", "API ready",
             env=APP_ENV, model=MODEL, cors_origins=app.state.cors_origins)
    yield
    log.info(logger, MODULE, "shutdown", "Application shutdown complete")


app = FastAPI(
    title="truthcheck",
    description="Statement fact-checking API",
    version=VERSION,
    lifespan=lifespan,
)
app.state.cors_origins = cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=app.state.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        log.info(logger, MODULE, "not_found", "Unknown route",
                 method=request.method, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # The only request body is {"text": ...}; anything unreadable means no text
    log.info(logger, MODULE, "invalid_body", "Request body rejected",
             path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": TEXT_REQUIRED})


app.include_router(health_router, tags=["health"])
app.include_router(fact_check_router, tags=["fact-check"])
