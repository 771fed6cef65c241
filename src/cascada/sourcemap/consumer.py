"""Source map v3 consumer.

Decodes an existing map so the tracker can chain it: when a stylesheet was
itself generated (from Sass, say), its map is applied on top of ours and the
final map points at the real originals.
"""

import json
from bisect import bisect_right
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cascada.sourcemap import vlq
from cascada.sourcemap.generator import SOURCE_MAP_VERSION, SourceMapping
from cascada.sourcemap.paths import join_path

# Prefix some servers add to JSON responses to defeat XSSI.
_XSSI_PREFIX = ")]}'"


@dataclass(frozen=True, slots=True)
class OriginalPosition:
    """Result of a lookup; every field is None when nothing maps there."""

    source: str | None = None
    line: int | None = None
    column: int | None = None
    name: str | None = None


class SourceMapConsumer:
    """Read-only view of a v3 source map.

    Args:
        raw: The map as a dict or a JSON string.

    Raises:
        ValueError: On malformed JSON, an unsupported version, indexed
            (sectioned) maps, or bad ``mappings`` data.

    """

    __slots__ = ("file", "source_root", "sources", "names", "_contents", "_lines")

    def __init__(self, raw: Mapping[str, Any] | str) -> None:
        if isinstance(raw, str):
            text = raw
            if text.startswith(_XSSI_PREFIX):
                text = text.split("\n", 1)[1] if "\n" in text else ""
            raw = json.loads(text)
        if not isinstance(raw, Mapping):
            msg = "Source map must be a JSON object"
            raise ValueError(msg)

        if raw.get("version") != SOURCE_MAP_VERSION:
            msg = f"Unsupported source map version: {raw.get('version')!r}"
            raise ValueError(msg)
        if "sections" in raw:
            msg = "Indexed source maps are not supported"
            raise ValueError(msg)

        self.file: str | None = raw.get("file")
        self.source_root: str | None = raw.get("sourceRoot") or None
        raw_sources = [str(s) for s in raw.get("sources", [])]
        if self.source_root:
            self.sources = [join_path(self.source_root, s) for s in raw_sources]
        else:
            self.sources = raw_sources
        self.names: list[str] = [str(n) for n in raw.get("names", [])]

        contents = raw.get("sourcesContent") or []
        self._contents: dict[str, str] = {
            source: content
            for source, content in zip(self.sources, contents)
            if content is not None
        }
        self._lines = self._decode(str(raw.get("mappings", "")))

    def _decode(self, mappings: str) -> dict[int, list[SourceMapping]]:
        lines: dict[int, list[SourceMapping]] = {}
        source = 0
        orig_line = 0
        orig_column = 0
        name = 0
        for line_no, line in enumerate(mappings.split(";"), start=1):
            column = 0
            decoded: list[SourceMapping] = []
            for segment in line.split(","):
                if not segment:
                    continue
                fields = vlq.decode(segment)
                if len(fields) not in (1, 4, 5):
                    msg = f"Invalid mapping segment {segment!r} on line {line_no}"
                    raise ValueError(msg)
                column += fields[0]
                if len(fields) == 1:
                    decoded.append(SourceMapping(line_no, column))
                    continue
                source += fields[1]
                orig_line += fields[2]
                orig_column += fields[3]
                mapped_name = None
                if len(fields) == 5:
                    name += fields[4]
                try:
                    mapped_source = self.sources[source]
                    if len(fields) == 5:
                        mapped_name = self.names[name]
                except IndexError as e:
                    msg = f"Mapping segment {segment!r} on line {line_no} is out of range"
                    raise ValueError(msg) from e
                decoded.append(
                    SourceMapping(
                        line_no, column, mapped_source, orig_line + 1, orig_column, mapped_name
                    )
                )
            if decoded:
                decoded.sort(key=SourceMapping.sort_key)
                lines[line_no] = decoded
        return lines

    def mappings(self) -> list[SourceMapping]:
        """All mappings in generated order."""
        return [m for line in sorted(self._lines) for m in self._lines[line]]

    def original_position_for(self, line: int, column: int) -> OriginalPosition:
        """Find the original position for a generated (line, column).

        Uses the closest mapping at or before ``column`` on the same line.

        Args:
            line: Generated line (1-indexed)
            column: Generated column (0-indexed)
        """
        candidates = self._lines.get(line)
        if not candidates:
            return OriginalPosition()
        columns = [m.generated_column for m in candidates]
        index = bisect_right(columns, column) - 1
        if index < 0:
            return OriginalPosition()
        mapping = candidates[index]
        if mapping.source is None:
            return OriginalPosition()
        return OriginalPosition(
            source=mapping.source,
            line=mapping.original_line,
            column=mapping.original_column,
            name=mapping.name,
        )

    def source_content_for(self, source: str) -> str | None:
        return self._contents.get(source)
