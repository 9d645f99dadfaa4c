"""Application entrypoint hosting the Filestore connector."""

import os

from fastapi import FastAPI

from filestore.api import routes_actions, routes_health
from filestore.core.config import settings
from filestore.core.logging import setup_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    setup_logging()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
    )

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_actions.router, tags=["actions"])

    return app


# Export app instance for ASGI servers
app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(app, host="0.0.0.0", port=port)
