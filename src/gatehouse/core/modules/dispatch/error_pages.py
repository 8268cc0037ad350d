"""Render dispatch errors as static error pages."""

from pathlib import Path

import structlog
from starlette.responses import HTMLResponse, PlainTextResponse, Response

from gatehouse.errors import DispatchError

logger = structlog.get_logger(__name__)

ERROR_PAGES_DIR = Path("pages") / "error"


def render_error_page(status_code: int, page: str, static_root: Path | str) -> Response:
    """Serve ``<root>/pages/error/<page>`` with the given status code.

    Falls back to a plain-text body when the page cannot be read; the
    status code is kept either way.
    """
    page_path = Path(static_root) / ERROR_PAGES_DIR / page
    try:
        content = page_path.read_bytes()
    except OSError as e:
        logger.error("Failed to load custom error page", page=str(page_path), error=str(e))
        return PlainTextResponse(f"Error {status_code}: Could not load custom error page.", status_code=status_code)
    return HTMLResponse(content, status_code=status_code)


def render_error(error: DispatchError, static_root: Path | str) -> Response:
    return render_error_page(error.status_code, error.page, static_root)
