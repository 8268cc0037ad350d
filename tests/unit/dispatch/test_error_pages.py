"""Tests for error page rendering."""

import pytest

from gatehouse.core.modules.dispatch.error_pages import render_error, render_error_page
from gatehouse.errors import ExpiredSessionError, InternalError, NotFoundError, UnauthorizedError


class TestRenderError:
    @pytest.mark.parametrize(
        ("error", "status_code", "page"),
        [
            (UnauthorizedError(), 401, "unauthorized-error.html"),
            (ExpiredSessionError(), 401, "expired-session-error.html"),
            (NotFoundError("/srv/pages/x.html"), 404, "not-found-error.html"),
            (InternalError("/srv/pages/x.html", PermissionError()), 500, "internal-server-error.html"),
        ],
    )
    def test_status_and_page(self, static_root, error, status_code, page):
        response = render_error(error, static_root)

        assert response.status_code == status_code
        assert response.body == (static_root / "pages" / "error" / page).read_bytes()
        assert response.headers["content-type"] == "text/html; charset=utf-8"


class TestRenderErrorPage:
    def test_fallback_keeps_status_code(self, tmp_path):
        response = render_error_page(401, "unauthorized-error.html", tmp_path)

        assert response.status_code == 401
        assert response.body == b"Error 401: Could not load custom error page."
        assert response.headers["content-type"].startswith("text/plain")

    def test_fallback_when_page_is_a_directory(self, static_root):
        (static_root / "pages" / "error" / "teapot.html").mkdir()

        response = render_error_page(418, "teapot.html", static_root)

        assert response.status_code == 418
        assert response.body == b"Error 418: Could not load custom error page."
