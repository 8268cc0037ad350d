"""Request dispatch: session lookup, custom routes, policy checks, static files."""

from enum import StrEnum
from pathlib import Path

import structlog
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import FileResponse, RedirectResponse, Response

from gatehouse.core.modules.dispatch.error_pages import render_error
from gatehouse.core.modules.route.models import CustomRoute, RouteTable
from gatehouse.core.modules.session.models import Session
from gatehouse.core.modules.session.store import SessionStore
from gatehouse.core.modules.static.resolver import DirectoryRedirect, locate
from gatehouse.errors import (
    DispatchError,
    ExpiredSessionError,
    InternalError,
    NotFoundError,
    PolicyRejection,
    UnauthorizedError,
)

logger = structlog.get_logger(__name__)

CLOSED_MARKER = "closed/"
EXPIRABLE_MARKER = "expirable/"
BODY_LOGGED_METHODS = frozenset({"POST", "PUT", "PATCH"})
NO_BODY_STATUSES = frozenset({204, 304})


class Outcome(StrEnum):
    CUSTOM_HANDLED = "custom_handled"
    UNAUTHORIZED = "unauthorized"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"
    STATIC_SERVED = "static_served"
    REDIRECTED = "redirected"


def outcome_of(error: DispatchError) -> Outcome:
    if isinstance(error, UnauthorizedError):
        return Outcome.UNAUTHORIZED
    if isinstance(error, ExpiredSessionError):
        return Outcome.EXPIRED
    if isinstance(error, NotFoundError):
        return Outcome.NOT_FOUND
    return Outcome.INTERNAL_ERROR


def sync_content_length(response: Response) -> None:
    """Make the content-length header agree with a body written after construction."""
    if response.status_code < 200 or response.status_code in NO_BODY_STATUSES:
        if "content-length" in response.headers:
            del response.headers["content-length"]
        return
    response.headers["content-length"] = str(len(response.body))


def remote_address(request: Request) -> str:
    """Format the peer address as ``host:port`` (``[host]:port`` for IPv6)."""
    if request.client is None:
        return ""
    host, port = request.client.host, request.client.port
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class Dispatcher:
    """Turns each inbound request into exactly one response.

    Built once at startup with the session store, the custom route table
    and the content root. ``dispatch`` is synchronous and safe to call from
    many threads at once; it never raises.
    """

    def __init__(self, store: SessionStore, routes: RouteTable, static_root: Path | str) -> None:
        self._store = store
        self._routes = routes
        self._static_root = Path(static_root)

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def routes(self) -> RouteTable:
        return self._routes

    @property
    def static_root(self) -> Path:
        return self._static_root

    def dispatch(self, request: Request, body: bytes = b"") -> Response:
        self._log_request(request, body)
        path = request.url.path

        try:
            session = self._store.get_or_create(remote_address(request))
            return self._dispatch(request, session)
        except DispatchError as e:
            self._log_error(e, request)
            return render_error(e, self._static_root)
        except Exception as e:
            logger.exception("Unhandled error during dispatch", outcome=Outcome.INTERNAL_ERROR, path=path)
            return render_error(InternalError(cause=e), self._static_root)

    def _dispatch(self, request: Request, session: Session) -> Response:
        path = request.url.path

        route = self._routes.match(path)
        if route is not None:
            return self._invoke(route, request, session)

        # Path markers are checked before touching the filesystem
        if CLOSED_MARKER in path and not session.authorized:
            raise UnauthorizedError
        if EXPIRABLE_MARKER in path and self._store.is_expired(session):
            raise ExpiredSessionError

        try:
            file_path = locate(self._static_root, path)
        except DirectoryRedirect as redirect:
            # The retried request carries the trailing slash, so the markers above apply to it
            location = redirect.location
            if request.url.query:
                location = f"{location}?{request.url.query}"
            logger.info("Redirecting to directory", outcome=Outcome.REDIRECTED, path=path, location=location)
            return RedirectResponse(location, status_code=301)

        logger.info("Serving static file", outcome=Outcome.STATIC_SERVED, path=path, file_path=str(file_path))
        # Activity is recorded only once the body has been sent
        return FileResponse(file_path, background=BackgroundTask(session.touch))

    def _invoke(self, route: CustomRoute, request: Request, session: Session) -> Response:
        if route.is_authorization_needed and not session.authorized:
            raise UnauthorizedError
        if route.is_expirable and self._store.is_expired(session):
            raise ExpiredSessionError

        logger.info("Invoking custom route", outcome=Outcome.CUSTOM_HANDLED, path=route.path)
        response = Response()
        result = route.handler(response, request, session)
        if result is not None:
            return result
        sync_content_length(response)
        return response

    def _log_error(self, error: DispatchError, request: Request) -> None:
        outcome = outcome_of(error)
        path = request.url.path
        if isinstance(error, PolicyRejection):
            logger.info("Request rejected", outcome=outcome, path=path, reason=str(error))
        elif isinstance(error, NotFoundError):
            logger.warning("File not found", outcome=outcome, path=path, file_path=error.path)
        elif isinstance(error, InternalError):
            logger.error(
                "Internal server error when accessing file",
                outcome=outcome,
                path=path,
                file_path=error.path,
                error=str(error.cause),
            )
        else:
            logger.error("Dispatch failed", outcome=outcome, path=path, error=str(error))

    def _log_request(self, request: Request, body: bytes) -> None:
        try:
            fields = {
                "method": request.method,
                "path": request.url.path,
                "content_type": request.headers.get("content-type"),
                "headers": dict(request.headers),
                "query_params": request.query_params.multi_items(),
            }
            if request.method in BODY_LOGGED_METHODS:
                fields["body"] = body.decode("utf-8", errors="replace")
            logger.info("Request received", **fields)
        except Exception as e:
            logger.debug("Failed to log request", error=str(e))
