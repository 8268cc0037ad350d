"""Map request paths onto the content-type partitioned content root."""

import os
import stat
from pathlib import Path

from gatehouse.errors import InternalError, NotFoundError

DEFAULT_SUBDIRECTORY = "pages"
INDEX_FILE = "index.html"

SUBDIRECTORIES: dict[str, str] = {
    ".html": "pages",
    ".css": "styles",
    ".png": "images",
    ".jpg": "images",
    ".jpeg": "images",
    ".gif": "images",
    ".svg": "images",
    ".ico": "images",
    ".js": "scripts",
}


def extension(request_path: str) -> str:
    """Return the extension of the last path segment, including the dot."""
    segment = request_path.rsplit("/", 1)[-1]
    dot = segment.rfind(".")
    return segment[dot:] if dot >= 0 else ""


def target_subdirectory(request_path: str) -> str:
    """Pick the content subdirectory for a request path.

    Unknown extensions and paths without one fall back to pages.
    """
    return SUBDIRECTORIES.get(extension(request_path), DEFAULT_SUBDIRECTORY)


def resolve_static_path(static_root: Path | str, request_path: str) -> Path:
    """Compose ``<root>/<subdirectory>/<request path>``.

    A request path that already starts with its subdirectory is not
    prefixed twice, so ``/styles/app.css`` and ``/app.css`` name the same file.

    Raises:
        NotFoundError: If the normalized path escapes the content root
    """
    subdirectory = target_subdirectory(request_path)
    parts = [part for part in request_path.split("/") if part]
    if parts and parts[0] == subdirectory:
        parts = parts[1:]

    root = os.path.normpath(static_root)
    candidate = os.path.normpath(os.path.join(root, subdirectory, *parts))
    if os.path.commonpath([root, candidate]) != root:
        raise NotFoundError(candidate)
    return Path(candidate)


class DirectoryRedirect(Exception):  # noqa: N818
    """A directory was requested without its trailing slash."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Redirect to {location}")
        self.location = location


def locate(static_root: Path | str, request_path: str) -> Path:
    """Resolve a request path to an existing file under the content root.

    Directories are served through their index file, but only when the
    request path ends in a slash; otherwise the client is sent there first,
    so path policies see the canonical directory path.

    Raises:
        DirectoryRedirect: If a directory was requested without a trailing slash
        NotFoundError: If nothing exists at the resolved path
        InternalError: If the existence check fails for any other reason
    """
    file_path = resolve_static_path(static_root, request_path)
    try:
        mode = file_path.stat().st_mode
        if stat.S_ISDIR(mode):
            if not request_path.endswith("/"):
                raise DirectoryRedirect(request_path + "/")
            file_path = file_path / INDEX_FILE
            mode = file_path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        raise NotFoundError(file_path) from None
    except OSError as e:
        raise InternalError(file_path, e) from e

    if stat.S_ISDIR(mode):
        raise NotFoundError(file_path)
    return file_path
