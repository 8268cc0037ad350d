"""Shared pytest fixtures."""

from collections.abc import Callable, Iterable, Iterator
from contextlib import ExitStack
from datetime import timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from gatehouse.app import App
from gatehouse.config import Config
from gatehouse.core.modules.route.models import CustomRoute
from gatehouse.core.modules.session.store import SessionStore
from gatehouse.web.server import create_fastapi_app

ERROR_PAGES = {
    "unauthorized-error.html": "<h1>unauthorized</h1>",
    "expired-session-error.html": "<h1>expired</h1>",
    "not-found-error.html": "<h1>not found</h1>",
    "internal-server-error.html": "<h1>internal error</h1>",
}


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    """Create a content root with one file per subdirectory and the error pages."""
    root = tmp_path / "website"
    (root / "pages" / "error").mkdir(parents=True)
    (root / "pages" / "closed").mkdir()
    (root / "pages" / "expirable").mkdir()
    (root / "styles").mkdir()
    (root / "images").mkdir()
    (root / "scripts").mkdir()

    for name, content in ERROR_PAGES.items():
        (root / "pages" / "error" / name).write_text(content)
    (root / "pages" / "index.html").write_text("<h1>home</h1>")
    (root / "pages" / "about.html").write_text("<h1>about</h1>")
    (root / "pages" / "closed" / "secret.html").write_text("<h1>secret</h1>")
    (root / "pages" / "expirable" / "news.html").write_text("<h1>news</h1>")
    (root / "styles" / "app.css").write_text("body { color: red; }")
    (root / "images" / "logo.svg").write_text("<svg></svg>")
    (root / "scripts" / "app.js").write_text("console.log('hi');")
    return root


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(timedelta(seconds=30))


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a bare Starlette request from an ASGI scope."""

    def _make(
        path: str,
        method: str = "GET",
        client: tuple[str, int] | None = ("10.0.0.1", 50000),
        query_string: bytes = b"",
        headers: list[tuple[bytes, bytes]] | None = None,
    ) -> Request:
        scope = {
            "type": "http",
            "method": method,
            "path": path,
            "raw_path": path.encode(),
            "root_path": "",
            "scheme": "http",
            "query_string": query_string,
            "headers": headers or [(b"host", b"testserver")],
            "client": client,
            "server": ("testserver", 80),
        }
        return Request(scope)

    return _make


@pytest.fixture
def make_client(static_root: Path) -> Iterator[Callable[..., tuple[App, TestClient]]]:
    """Start the full web app over the temporary content root."""
    with ExitStack() as stack:

        def _make(
            routes: Iterable[CustomRoute] = (), expiration: timedelta = timedelta(seconds=30)
        ) -> tuple[App, TestClient]:
            config = Config(static_root=str(static_root))
            app = App(config, routes, expiration)
            client = stack.enter_context(TestClient(create_fastapi_app(app, config)))
            return app, client

        yield _make
