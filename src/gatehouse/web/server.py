from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gatehouse.app import App
from gatehouse.config import Config
from gatehouse.errors import DispatchError
from gatehouse.web.error_handlers import dispatch_error_handler, general_exception_handler
from gatehouse.web.routers import dispatch_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        # Store app instance and config in app state
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    # The catch-all route owns every path, including the ones FastAPI would use for docs
    app = FastAPI(
        title="Gatehouse",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.include_router(dispatch_router)

    # Last resort; the dispatcher renders its own errors
    app.add_exception_handler(DispatchError, dispatch_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
