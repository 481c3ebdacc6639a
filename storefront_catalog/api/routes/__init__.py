"""API route registration."""

from fastapi import FastAPI

from storefront_catalog.api.routes import brands, categories, listings, system


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(categories.router)
    app.include_router(brands.router)
    app.include_router(listings.router)
