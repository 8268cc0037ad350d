import structlog
from fastapi import Request
from fastapi.responses import Response

from gatehouse.config import Config
from gatehouse.core.modules.dispatch.error_pages import render_error
from gatehouse.errors import DispatchError, InternalError

logger = structlog.get_logger(__name__)


def _static_root(request: Request) -> str:
    config: Config = request.app.state.config
    return config.static_root


async def dispatch_error_handler(request: Request, exc: Exception) -> Response:
    """Render a DispatchError that escaped the dispatcher as its error page."""
    if not isinstance(exc, DispatchError):
        return await general_exception_handler(request, exc)
    return render_error(exc, _static_root(request))


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error", path=request.url.path, error=str(exc))
    return render_error(InternalError(cause=exc), _static_root(request))
