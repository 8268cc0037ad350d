"""Application entry point for the gatehouse server."""

from datetime import timedelta

from starlette.requests import Request
from starlette.responses import Response

from gatehouse.app import App
from gatehouse.config import Config
from gatehouse.core.modules.route.models import CustomRoute
from gatehouse.core.modules.session.models import Session
from gatehouse.logging import setup_logging
from gatehouse.web.runner import run_server

SESSION_EXPIRATION = timedelta(seconds=30)


def authorize(response: Response, request: Request, session: Session) -> None:  # noqa: ARG001
    """Grant authorization to the calling client's session."""
    session.authorized = True
    response.headers["content-type"] = "text/plain; charset=utf-8"
    response.body = b"Now Authorized"


CUSTOM_ROUTES = [
    CustomRoute(path="/custom/authorize", handler=authorize),
]


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config, CUSTOM_ROUTES, SESSION_EXPIRATION)
    run_server(app, config)


if __name__ == "__main__":
    main()
