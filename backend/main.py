import logging
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, load_settings
from routers.health.routes import router as health_router
from routers.misc.routes import common_headers_middleware, route_not_found_handler
from server import serve


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """FastAPI application entrypoint.

    Only `GET /health` is routed. The interactive docs are disabled so that
    every other path falls through to the not-found payload, and trailing
    slashes are not redirected (`/health/` is a different route).
    """
    settings = settings or Settings()
    app = FastAPI(
        title="Health Probe API",
        description="Liveness/readiness endpoint for the deployment pipeline.",
        version="1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings

    app.middleware("http")(common_headers_middleware)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)

    # Add routes
    app.include_router(health_router)
    return app


# Environment settings are only read by the entrypoint below, so importing this
# module never fails on a bad PORT. Run the service with `python main.py`:
# `uvicorn main:app` skips HealthServer and its startup/shutdown log lines.
app = create_app()


if __name__ == "__main__":
    settings = load_settings()
    app.state.settings = settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    serve(app, settings)
