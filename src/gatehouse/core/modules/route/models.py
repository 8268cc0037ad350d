"""Custom route descriptors checked ahead of static resolution."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response

from gatehouse.core.modules.session.models import Session


class RouteHandler(Protocol):
    """Handler for a custom route.

    Receives a fresh response to write into, the request and the caller's
    session. A handler may set ``status_code``, headers and ``body`` (bytes)
    on it; content-length is brought in line with the body afterwards.
    Returning a Response replaces the one passed in; returning None sends
    the passed-in response as written.
    """

    def __call__(self, response: Response, request: Request, session: Session) -> Response | None: ...


@dataclass(frozen=True)
class CustomRoute:
    path: str  # Matched exactly against the request path
    handler: RouteHandler
    is_authorization_needed: bool = False
    is_expirable: bool = False


class RouteTable:
    """Ordered, read-only list of custom routes. First exact match wins."""

    def __init__(self, routes: Iterable[CustomRoute] = ()) -> None:
        self._routes = tuple(routes)

    def match(self, path: str) -> CustomRoute | None:
        for route in self._routes:
            if route.path == path:
                return route
        return None

    def __iter__(self) -> Iterator[CustomRoute]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
