"""FastAPI application entry point."""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roadtrip.api import auth, trips
from roadtrip.config import Settings, get_settings
from roadtrip.errors import AuthenticationError, TripPlannerError

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Collapse FastAPI's error list into one readable message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the API app. Settings are read once here and closed over by the handlers."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logger.info(f"Road trip planner API starting ({settings.environment})")
        yield

    app = FastAPI(
        title="RoadTrip Planner API",
        description="Plan road trips as ordered lists of stops on a map",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def error_response(
        status_code: int, message: str, exc: BaseException, headers: dict | None = None
    ) -> JSONResponse:
        stack = "".join(traceback.format_exception(exc)) if settings.is_development else None
        return JSONResponse(
            status_code=status_code,
            content={"error": message, "stack": stack},
            headers=headers,
        )

    @app.exception_handler(TripPlannerError)
    async def handle_trip_planner_error(_: Request, exc: TripPlannerError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return error_response(exc.status_code, exc.message, exc, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(_: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc), exc
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), exc, exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", exc
        )

    # Register routers
    app.include_router(auth.router)
    app.include_router(trips.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Root route."""
        return "RoadTrip Planner API is running..."

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("roadtrip.main:app", host="0.0.0.0", port=get_settings().port)  # noqa: S104


if __name__ == "__main__":
    serve()
