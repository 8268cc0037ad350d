from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from datetime import timedelta

import structlog

from gatehouse.config import Config
from gatehouse.core.modules.dispatch.service import Dispatcher
from gatehouse.core.modules.route.models import CustomRoute, RouteTable
from gatehouse.core.modules.session.store import SessionStore

logger = structlog.get_logger(__name__)


class Core:
    """Container providing config, the session store, custom routes and the dispatcher."""

    config: Config
    sessions: SessionStore
    routes: RouteTable
    dispatcher: Dispatcher

    def __init__(self, config: Config, routes: Iterable[CustomRoute], session_expiration: timedelta) -> None:
        """Wire the dispatcher; routes and expiration are fixed from here on."""
        self.config = config
        self.sessions = SessionStore(session_expiration)
        self.routes = RouteTable(routes)
        self.dispatcher = Dispatcher(self.sessions, self.routes, config.static_root)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        logger.info(
            "Dispatcher started",
            static_root=self.config.static_root,
            custom_routes=[route.path for route in self.routes],
            session_expiration_seconds=self.sessions.expiration.total_seconds(),
        )

    async def on_stop(self) -> None:
        logger.info("Dispatcher stopped", sessions=len(self.sessions))
