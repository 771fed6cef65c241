"""Source map v3 generator.

SourceMapGenerator is the live, structured map handed back by
``compile(..., {"sourcemap": "generator"})``. ``to_dict()`` is the
serialized form returned for ``sourcemap: True``.

Example:
    >>> gen = SourceMapGenerator(file="site.min.css")
    >>> gen.add_mapping((1, 0), (3, 4), source="site.css")
    >>> gen.to_dict()["mappings"]
    'AAEI'
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from cascada.sourcemap import vlq
from cascada.sourcemap.paths import join_path

if TYPE_CHECKING:
    from cascada.sourcemap.consumer import SourceMapConsumer

SOURCE_MAP_VERSION = 3


@dataclass(frozen=True, slots=True)
class SourceMapping:
    """One mapping from a generated position to an original one.

    Lines are 1-indexed, columns 0-indexed, as in the source map format.
    A mapping without a source marks generated text with no origin.
    """

    generated_line: int
    generated_column: int
    source: str | None = None
    original_line: int | None = None
    original_column: int | None = None
    name: str | None = None

    def sort_key(self) -> tuple[int, int, str, int, int, str]:
        return (
            self.generated_line,
            self.generated_column,
            self.source or "",
            self.original_line or 0,
            self.original_column or 0,
            self.name or "",
        )


class SourceMapGenerator:
    """Accumulates mappings and serializes them as a v3 source map.

    Sources and names are indexed in first-seen order.

    """

    __slots__ = ("file", "_mappings", "_sources", "_names", "_contents")

    def __init__(self, file: str | None = None) -> None:
        self.file = file
        self._mappings: list[SourceMapping] = []
        self._sources: dict[str, None] = {}
        self._names: dict[str, None] = {}
        self._contents: dict[str, str] = {}

    # =========================================================================
    # Building
    # =========================================================================

    def add_mapping(
        self,
        generated: tuple[int, int],
        original: tuple[int, int] | None = None,
        source: str | None = None,
        name: str | None = None,
    ) -> None:
        """Record a mapping.

        Args:
            generated: (line, column) in the output, line >= 1, column >= 0
            original: (line, column) in ``source``; requires ``source``
            source: Original source name
            name: Original identifier, if any

        Raises:
            ValueError: On out-of-range positions or an original position
                without a source.
        """
        line, column = generated
        if line < 1 or column < 0:
            msg = f"Invalid generated position: {generated!r}"
            raise ValueError(msg)
        if original is None:
            if source is not None or name is not None:
                msg = "A mapping with a source or name needs an original position"
                raise ValueError(msg)
            self._mappings.append(SourceMapping(line, column))
            return
        orig_line, orig_column = original
        if source is None or orig_line < 1 or orig_column < 0:
            msg = f"Invalid original mapping: {original!r} in {source!r}"
            raise ValueError(msg)
        self._mappings.append(SourceMapping(line, column, source, orig_line, orig_column, name))
        self._sources.setdefault(source, None)
        if name is not None:
            self._names.setdefault(name, None)

    def set_source_content(self, source: str, content: str | None) -> None:
        """Embed (or with ``None``, remove) the original text of ``source``."""
        if content is None:
            self._contents.pop(source, None)
        else:
            self._contents[source] = content

    def apply_source_map(
        self,
        consumer: "SourceMapConsumer",
        source_file: str | None = None,
        source_map_path: str | None = None,
    ) -> None:
        """Chain an input map: rewrite mappings into ``source_file`` through it.

        Mappings whose source is ``source_file`` are looked up in
        ``consumer``; those that resolve now point at the consumer's
        original sources (joined onto ``source_map_path`` when given). The
        consumer's embedded source contents are carried over.

        Raises:
            ValueError: If no source file is given and the consumer has none.
        """
        if source_file is None:
            if consumer.file is None:
                msg = "apply_source_map needs a source_file when the input map has no 'file'"
                raise ValueError(msg)
            source_file = consumer.file

        mappings: list[SourceMapping] = []
        sources: dict[str, None] = {}
        names: dict[str, None] = {}
        for mapping in self._mappings:
            if mapping.source == source_file and mapping.original_line is not None:
                original = consumer.original_position_for(
                    mapping.original_line, mapping.original_column or 0
                )
                if original.source is not None:
                    source = original.source
                    if source_map_path is not None:
                        source = join_path(source_map_path, source)
                    mapping = replace(
                        mapping,
                        source=source,
                        original_line=original.line,
                        original_column=original.column,
                        name=original.name if original.name is not None else mapping.name,
                    )
            if mapping.source is not None:
                sources.setdefault(mapping.source, None)
            if mapping.name is not None:
                names.setdefault(mapping.name, None)
            mappings.append(mapping)

        self._mappings = mappings
        self._sources = sources
        self._names = names

        for source in consumer.sources:
            content = consumer.source_content_for(source)
            if content is not None:
                if source_map_path is not None:
                    source = join_path(source_map_path, source)
                self.set_source_content(source, content)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def sources(self) -> list[str]:
        return list(self._sources)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def source_content_for(self, source: str) -> str | None:
        return self._contents.get(source)

    def mappings(self) -> list[SourceMapping]:
        """All mappings, ordered by generated position."""
        return sorted(self._mappings, key=SourceMapping.sort_key)

    def generated_positions_for(self, source: str, line: int) -> list[tuple[int, int]]:
        """Generated (line, column) pairs that map back to ``line`` of ``source``."""
        return [
            (m.generated_line, m.generated_column)
            for m in self.mappings()
            if m.source == source and m.original_line == line
        ]

    def __len__(self) -> int:
        return len(self._mappings)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible v3 source map dict."""
        sources = self.sources
        result: dict[str, Any] = {
            "version": SOURCE_MAP_VERSION,
            "sources": sources,
            "names": self.names,
            "mappings": self._serialize_mappings(sources),
        }
        if self.file is not None:
            result["file"] = self.file
        if self._contents:
            result["sourcesContent"] = [self._contents.get(s) for s in sources]
        return result

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        return self.to_json()

    def _serialize_mappings(self, sources: Iterable[str]) -> str:
        source_index = {source: i for i, source in enumerate(sources)}
        name_index = {name: i for i, name in enumerate(self._names)}

        prev_line = 1
        prev_column = 0
        prev_source = 0
        prev_orig_line = 0
        prev_orig_column = 0
        prev_name = 0
        prev_key: tuple[Any, ...] | None = None

        out: list[str] = []
        for mapping in self.mappings():
            key = mapping.sort_key()
            if mapping.generated_line != prev_line:
                prev_column = 0
                out.append(";" * (mapping.generated_line - prev_line))
                prev_line = mapping.generated_line
            elif prev_key is not None:
                if key == prev_key:
                    continue
                out.append(",")
            prev_key = key

            out.append(vlq.encode(mapping.generated_column - prev_column))
            prev_column = mapping.generated_column

            if mapping.source is None:
                continue
            index = source_index[mapping.source]
            out.append(vlq.encode(index - prev_source))
            prev_source = index

            line = (mapping.original_line or 1) - 1
            out.append(vlq.encode(line - prev_orig_line))
            prev_orig_line = line

            column = mapping.original_column or 0
            out.append(vlq.encode(column - prev_orig_column))
            prev_orig_column = column

            if mapping.name is not None:
                index = name_index[mapping.name]
                out.append(vlq.encode(index - prev_name))
                prev_name = index

        return "".join(out)
