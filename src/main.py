"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import auth, users
from src.config import get_settings
from src.database import check_database_connection
from src.exceptions import UserCrudError
from src.schemas.envelope import Envelope, envelope

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    logger.info(f"Starting user CRUD API ({settings.environment})")
    # Startup aborts here if the database is unreachable
    check_database_connection()
    yield
    logger.info("Shutting down user CRUD API")


app = FastAPI(
    title="User CRUD API",
    description="User management with password login and bearer-token protected CRUD",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(UserCrudError)
async def user_crud_error_handler(request: Request, exc: UserCrudError) -> JSONResponse:
    """Render application errors in the standard envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=envelope(False, None, exc.message))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies as 400 rather than FastAPI's default 422."""
    errors = exc.errors()
    if not errors or errors[0].get("type") == "json_invalid":
        message = "invalid request body"
    else:
        first = errors[0]
        # Integer parts are list indexes or JSON decode offsets
        parts = [part for part in first.get("loc", ()) if part != "body"]
        field = ".".join(str(part) for part in parts if not isinstance(part, int))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=envelope(False, None, message)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework errors (unknown route, wrong method) in the envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(False, None, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; details stay in the log."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(False, None, "internal server error"),
    )


# Register routers
app.include_router(auth.router)
app.include_router(users.router)


@app.get("/healthcheck", response_model=Envelope)
async def healthcheck():
    """Health check endpoint."""
    return Envelope(status=True, data=None, message="healthcheck works.. :)")
