from fastapi import FastAPI

from bloom_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from bloom_catalog.entrypoints.http.routes.catalog import router as catalog_router
from bloom_catalog.entrypoints.http.routes.health import router as health_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="Bloom Catalog API",
        description="""
        Flower catalog API serving filtered, sorted and paginated listings.

        ## Features
        - Browse the catalog with filters, search, sorting and pagination
        - List filter options derived from the catalog
        - Get item details

        ## Query strings
        The listing endpoint accepts the same query string the storefront
        keeps in its URL. Tampered or out-of-range values are clamped.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        contact={
            "name": "Bloom Catalog Team",
            "email": "dev@bloom-catalog.dev",
        },
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(catalog_router, prefix="/v1")

    return app


app = build_app()
