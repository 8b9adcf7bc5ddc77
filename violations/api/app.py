"""FastAPI application factory for the violations report service.

Creates and configures the FastAPI app with the report routes registered.
"""

import logging

from fastapi import FastAPI

from .. import __version__

logger = logging.getLogger(__name__)


def create_app(build_repository, config) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        build_repository: BuildRepository the routes look builds up in
        config: ViolationsConfig with the per-category thresholds

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Violations Report",
        description="Per-build static analysis violations and health",
        version=__version__,
    )

    # Store shared dependencies on app state
    app.state.build_repository = build_repository
    app.state.config = config

    # Register routers
    from .routes.reports import router as reports_router

    app.include_router(reports_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "violations"}

    logger.info("FastAPI app created with violations routes registered")
    return app
