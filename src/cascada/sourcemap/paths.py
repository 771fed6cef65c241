"""Path helpers for source map ``sources`` entries.

Source maps store sources as URL-style paths (forward slashes), so native
Windows paths are converted before they are recorded.
"""

import os
import posixpath
import re
from urllib.parse import urljoin

_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_DRIVE = re.compile(r"^([A-Za-z]):/")


def is_url(path: str) -> bool:
    """True for anything with a scheme (``http:``, ``data:``, ``file:``)."""
    return bool(_URL.match(path)) and not _DRIVE.match(path)


def to_url_path(path: str) -> str:
    """Convert a native path to URL style.

    On Windows ``C:\\css\\site.css`` becomes ``/C:/css/site.css``; elsewhere
    the path is returned unchanged.
    """
    if os.name != "nt":
        return path
    path = path.replace("\\", "/")
    return _DRIVE.sub(r"/\1:/", path)


def join_path(root: str, path: str) -> str:
    """Join a source path onto ``root`` the way browsers resolve map sources.

    Absolute paths and URLs are returned as-is. An empty root means the
    current directory.
    """
    if path.startswith("/") or is_url(path):
        return path
    if is_url(root):
        return urljoin(root.rstrip("/") + "/", path)
    return posixpath.normpath(posixpath.join(root or ".", path))
