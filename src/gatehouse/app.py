from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager
from datetime import timedelta

from starlette.requests import Request
from starlette.responses import Response

from gatehouse.config import Config
from gatehouse.core.core import Core
from gatehouse.core.modules.route.models import CustomRoute
from gatehouse.core.modules.session.store import SessionStore


class App:
    """Facade for all application operations, delegates to Core."""

    def __init__(self, config: Config, routes: Iterable[CustomRoute], session_expiration: timedelta) -> None:
        self._core = Core(config, routes, session_expiration)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    @property
    def sessions(self) -> SessionStore:
        return self._core.sessions

    def dispatch(self, request: Request, body: bytes = b"") -> Response:
        """Produce the response for a request. Never raises."""
        return self._core.dispatcher.dispatch(request, body)
