"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.logging import access_log_middleware
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import events_router, health_router
from core.config import API_DEBUG, API_VERSION, USE_WHITELIST, WHITELIST_ORIGIN, parse_origins
from core.errors import ConfigError, CredentialError
from services.calendar import CalendarService, connect_calendar

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup/shutdown.

    Startup does not finish, so no request is accepted, until the calendar
    client is authorized. This may wait on the operator typing in an
    authorization code. ConfigError is left to abort startup.
    """
    if app.state.calendar is None:
        try:
            app.state.calendar = await asyncio.to_thread(connect_calendar)
        except CredentialError as e:
            logger.error("Calendar authorization failed, calendar routes will return 503: %s", e)

    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with one detail per field."""
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        details.append(f"{location}: {err['msg']}")

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Request validation failed",
            code=ErrorCodes.VALIDATION_ERROR,
            details=details,
        ).model_dump(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Return HTTPException details in the standard error format."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = ErrorResponse(
            error=str(exc.detail), code=ErrorCodes.INVALID_REQUEST
        ).model_dump()
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


# Global exception handler for unexpected errors
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected exceptions and answer 500 so the server keeps running."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


def create_app(
    calendar: CalendarService | None = None,
    use_whitelist: bool = USE_WHITELIST,
    whitelist_origins: list[str] | None = None,
) -> FastAPI:
    """
    Build the API application.

    Passing a calendar skips authorization at startup.

    Raises:
        ConfigError: whitelist enabled without any origins
    """
    app = FastAPI(
        title="OpenCalendar API",
        description="REST proxy for inviting recipients to and creating Google Calendar events",
        version=API_VERSION,
        debug=API_DEBUG,
        lifespan=lifespan,
    )
    app.state.calendar = calendar

    # Without a whitelist every origin is allowed
    if use_whitelist:
        origins = whitelist_origins if whitelist_origins is not None else parse_origins(WHITELIST_ORIGIN)
        if not origins:
            raise ConfigError("WHITELIST_ORIGIN is required when USE_WHITELIST is enabled")
    else:
        origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(access_log_middleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(events_router)

    return app


app = create_app()


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
