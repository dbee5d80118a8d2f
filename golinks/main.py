import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import links
from .backends.base import LinkBackend
from .backends.factory import create_backend
from .config import Settings, settings as default_settings
from .errors import RegistryError
from .logging_config import setup_logging
from .middleware import BearerTokenMiddleware
from .observability import PrometheusMiddleware, REGISTRY_ERRORS_TOTAL, metrics_endpoint
from .registry import LinkRegistry
from .validation import LinkNameValidator

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, backend: Optional[LinkBackend] = None) -> FastAPI:
    """Build the golinks application around one registry.

    The backend is chosen here, once, from ``settings`` unless one is passed
    in. Its ``init``/``close`` hooks run in the app lifespan.
    """
    settings = settings or default_settings
    backend = backend or create_backend(settings)
    registry = LinkRegistry(backend, LinkNameValidator(settings.GOLINK_PATTERN))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup logic
        await backend.init()
        logger.info("Golink registry started", extra={"backend": backend.name})
        yield
        # Shutdown logic
        await backend.close()

    app = FastAPI(
        title="golinks",
        description="Short-name redirect directory",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry

    # Added last runs first: CORS wraps auth so 401s carry CORS headers
    app.add_middleware(BearerTokenMiddleware, token=settings.API_TOKEN)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        REGISTRY_ERRORS_TOTAL.labels(category=exc.category.value).inc()
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    app.add_route("/metrics", metrics_endpoint)
    app.include_router(links.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def run():
    import uvicorn

    setup_logging(default_settings.LOG_LEVEL)
    uvicorn.run(
        create_app(default_settings),
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
