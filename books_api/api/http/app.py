"""The Books API FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse, PlainTextResponse

from books_api import __version__
from books_api.api.http.app_data import ApplicationDependencies
from books_api.api.http.middleware.paths import CollectionCaseMiddleware
from books_api.api.http.middleware.requests import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from books_api.api.http.routers.books import router as books_router
from books_api.api.http.routers.health import router as health_router
from books_api.api.utils.app_startup import configure_logging
from books_api.core.services import DbSessionService
from books_api.runtime.context import get_config
from books_api.runtime.init_db import init_db

configure_logging()

__all__ = ["app", "startup", "shutdown"]


async def startup() -> None:
    """Open the database, install the app dependencies and prepare the schema."""
    config = get_config()
    logger.info(
        "Starting {} in {} environment", config.app.name, config.app.environment
    )

    database_service = DbSessionService()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service
    )
    init_db(database_service, seed=config.database.seed_on_startup)


async def shutdown() -> None:
    logger.info("Shutting down {}", get_config().app.name)
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


def _cors_options() -> dict:
    app_config = get_config().app
    if app_config.environment == "production" and "*" in app_config.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    return {
        "allow_origins": app_config.cors.origins,
        "allow_credentials": app_config.cors.allow_credentials,
        "allow_methods": app_config.cors.allow_methods,
        "allow_headers": app_config.cors.allow_headers,
        "expose_headers": ["Location", "X-Request-ID"],
    }


_in_production = get_config().app.environment == "production"

app = FastAPI(
    title="Books API",
    description="API that manages a collection of books in a fictional store",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if _in_production else "/docs",
    redoc_url=None if _in_production else "/redoc",
)

# Last added runs first
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CORSMiddleware, **_cors_options())
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CollectionCaseMiddleware, collection="Books")


def _describe_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location or 'body'}: {error.get('msg', 'Invalid value')}"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests with 400 and a list of messages, like rejected books."""
    errors = [_describe_validation_error(error) for error in exc.errors()]
    logger.bind(status_code=400).warning("request.validation_error: {}", errors)
    return JSONResponse(status_code=400, content=errors)


app.include_router(health_router)
app.include_router(books_router)


def landing_page_text() -> str:
    base_url = get_config().app.base_url
    return "\n".join(
        [
            "Books API",
            "",
            "API that manages a collection of books in a fictional store",
            "",
            f"Use {base_url}/Books/ to get a list of books (Use POST to add a new book)",
            f"Use {base_url}/Books/{{id}} to get a specific book "
            "(Use PUT to update a book, or DELETE to remove a book)",
            "",
        ]
    )


@app.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def landing_page() -> str:
    return landing_page_text()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # RequestLoggingMiddleware logs every request
    )
