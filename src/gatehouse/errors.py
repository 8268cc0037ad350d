from abc import ABC
from pathlib import Path
from typing import ClassVar


class DispatchError(ABC, Exception):
    """Base class for outcomes that end a request with an error page.

    Every subclass maps to a fixed HTTP status code and a static page
    under ``pages/error`` of the content root. Raised where the condition
    is detected, rendered at the dispatcher boundary.
    """

    status_code: ClassVar[int] = 500
    page: ClassVar[str] = "internal-server-error.html"


class PolicyRejection(DispatchError):
    """Routine rejection driven by session state, not a failure."""


class UnauthorizedError(PolicyRejection):
    """Raised when a protected resource is requested by an unauthorized session."""

    status_code = 401
    page = "unauthorized-error.html"

    def __init__(self, message: str = "Session is not authorized") -> None:
        super().__init__(message)


class ExpiredSessionError(PolicyRejection):
    """Raised when an expirable resource is requested by an expired session."""

    status_code = 401
    page = "expired-session-error.html"

    def __init__(self, message: str = "Session has expired") -> None:
        super().__init__(message)


class ResourceMissing(DispatchError):
    """The request named something that does not exist."""


class NotFoundError(ResourceMissing):
    """Raised when the resolved static file does not exist."""

    status_code = 404
    page = "not-found-error.html"

    def __init__(self, path: Path | str, message: str = "File not found") -> None:
        super().__init__(f"{message}: {path}")
        self.path = str(path)


class SystemFailure(DispatchError):
    """Unexpected failure on the server side."""


class InternalError(SystemFailure):
    """Raised when a request cannot be served for reasons other than a missing file."""

    status_code = 500
    page = "internal-server-error.html"

    def __init__(self, path: Path | str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(f"Internal server error: {cause}" if cause else "Internal server error")
        self.path = str(path) if path is not None else None
        self.cause = cause
