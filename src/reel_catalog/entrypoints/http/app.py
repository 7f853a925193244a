from fastapi import FastAPI

from reel_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from reel_catalog.entrypoints.http.routes.health import router as health_router
from reel_catalog.entrypoints.http.routes.movies import router as movies_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Reel Catalog API",
        description="""
        Movie catalog API for storing and searching catalog entries.

        ## Features
        - Create, read, replace and delete movies
        - Full-text search over title and genres
        - Sorting and page-based pagination

        ## Concurrency
        Movie versions are advisory: concurrent updates are last-write-wins.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Validation failures list every offending field.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(movies_router, prefix="/v1")

    return app


app = build_app()
