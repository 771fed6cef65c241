"""Locate and load the source map an original stylesheet points to.

Looks for the last ``/*# sourceMappingURL=... */`` (or ``//#``) comment in
the source text. Inline ``data:`` URIs are decoded in place; anything else is
read from disk relative to the stylesheet.
"""

import base64
import json
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from cascada.errors import SourceMapError
from cascada.sourcemap.paths import is_url, join_path
from cascada.utils.logger import get_logger

logger = get_logger(__name__)

_INNER = r"[#@] sourceMappingURL=([^\s'\"]*)"
SOURCE_MAPPING_URL = re.compile(
    r"(?:/\*(?:\s*\r?\n(?://)?)?(?:" + _INNER + r")\s*\*/|//(?:" + _INNER + r"))\s*"
)
_DATA_URI = re.compile(r"^data:([^,;]*)(?:;charset=[^,;]+)?(;base64)?,(.*)$", re.DOTALL)
_JSON_MIME = re.compile(r"^(?:application|text)/json$")


@dataclass(frozen=True, slots=True)
class ResolvedSourceMap:
    """An input source map and the location its ``sources`` are relative to."""

    map: dict[str, Any]
    url: str
    sources_relative_to: str


def find_source_mapping_url(content: str) -> str | None:
    """Return the URL of the last sourceMappingURL comment, if any."""
    url = None
    for match in SOURCE_MAPPING_URL.finditer(content):
        url = match.group(1) if match.group(1) is not None else match.group(2)
    return url or None


def resolve_source_map(content: str, source_file: str) -> ResolvedSourceMap | None:
    """Load the map referenced from ``content``.

    Args:
        content: Original source text
        source_file: Name of the original source, used to resolve relative URLs

    Returns:
        ResolvedSourceMap, or None when the source references no map

    Raises:
        SourceMapError: If the referenced map cannot be read or decoded
    """
    url = find_source_mapping_url(content)
    if url is None:
        return None

    data_uri = _DATA_URI.match(url)
    if data_uri is not None:
        mime, is_base64, payload = data_uri.groups()
        if mime and not _JSON_MIME.match(mime):
            msg = f"Unsupported source map data URI type {mime!r} in {source_file}"
            raise SourceMapError(msg)
        try:
            text = base64.b64decode(payload).decode("utf-8") if is_base64 else unquote(payload)
        except ValueError as e:
            msg = f"Cannot decode inline source map in {source_file}: {e}"
            raise SourceMapError(msg) from e
        return ResolvedSourceMap(_parse(text, source_file), url, source_file)

    if is_url(url) and not url.startswith("file:"):
        msg = f"Cannot fetch remote source map {url!r} referenced by {source_file}"
        raise SourceMapError(msg)

    map_path = join_path(posixpath.dirname(source_file), unquote(url.removeprefix("file://")))
    try:
        text = Path(map_path).read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read source map {map_path!r} referenced by {source_file}: {e}"
        raise SourceMapError(msg) from e
    logger.debug("Loaded input source map %s for %s", map_path, source_file)
    return ResolvedSourceMap(_parse(text, map_path), url, map_path)


def _parse(text: str, origin: str) -> dict[str, Any]:
    if text.startswith(")]}'"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Invalid source map JSON from {origin}: {e}"
        raise SourceMapError(msg) from e
    if not isinstance(data, dict):
        msg = f"Source map from {origin} is not a JSON object"
        raise SourceMapError(msg)
    return data
