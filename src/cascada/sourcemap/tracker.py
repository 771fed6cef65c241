"""Source map tracking for a single compile.

SourceMapTracker is attached to a renderer for the duration of one
compile() call. Every fragment the renderer emits advances the tracked
output position; fragments that carry a location also record a mapping
back to the original source.

Lifecycle:
    tracker = SourceMapTracker(options)
    tracker.attach(renderer)     # renderer becomes map-aware
    code = compiler.compile_node(node)
    tracker.finalize()           # embed sources, chain input maps
    tracker.generator            # live map, or tracker.serialize()

The compile cache replays fragments through ``mark`` / ``capture`` /
``replay`` so memoized subtrees still land in the map at the right place.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cascada.config import CompileOptions
from cascada.errors import SourceMapError
from cascada.sourcemap.consumer import SourceMapConsumer
from cascada.sourcemap.generator import SourceMapGenerator, SourceMapping
from cascada.sourcemap.paths import to_url_path
from cascada.sourcemap.resolve import resolve_source_map
from cascada.utils.logger import get_logger

if TYPE_CHECKING:
    from cascada.location import SourceLocation
    from cascada.renderers.base import BaseRenderer

logger = get_logger(__name__)

DEFAULT_SOURCE = "source.css"


@dataclass(frozen=True, slots=True)
class RecordedMapping:
    """A mapping recorded relative to the start of a rendered fragment.

    ``line_delta`` counts newlines from the fragment start. On the first
    line ``column`` is relative to the fragment's start column; on later
    lines it is absolute.
    """

    line_delta: int
    column: int
    source: str
    original_line: int
    original_column: int


@dataclass(frozen=True, slots=True)
class Mark:
    """Tracker state at the start of a fragment."""

    index: int
    line: int
    column: int


class SourceMapTracker:
    """Records output positions while a renderer emits text.

    Positions follow the renderer's emission order: line starts at 1,
    column at 1 and is reported 0-indexed in mappings.

    """

    __slots__ = (
        "options",
        "generator",
        "line",
        "column",
        "files",
        "_recorded",
        "_attached",
        "_finalized",
    )

    def __init__(self, options: CompileOptions | None = None) -> None:
        self.options = options or CompileOptions()
        self.generator = SourceMapGenerator()
        self.line = 1
        self.column = 1
        self.files: dict[str, str] = {}
        self._recorded: list[SourceMapping] = []
        self._attached = False
        self._finalized = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def attach(self, renderer: BaseRenderer) -> None:
        """Make ``renderer`` route its emits through this tracker."""
        renderer.attach_tracker(self)
        self._attached = True

    def finalize(self) -> None:
        """Apply source contents and input source maps to the generator.

        Raises:
            SourceMapError: If the tracker was never attached or was already
                finalized; also propagated from unreadable input maps.
        """
        if not self._attached:
            msg = "Source map finalized before tracking was attached to a renderer"
            raise SourceMapError(msg)
        if self._finalized:
            msg = "Source map already finalized"
            raise SourceMapError(msg)
        self._finalized = True

        for file, content in self.files.items():
            self.generator.set_source_content(file, content)
            if not self.options.input_sourcemaps:
                continue
            resolved = resolve_source_map(content, file)
            if resolved is None:
                continue
            try:
                consumer = SourceMapConsumer(resolved.map)
            except ValueError as e:
                msg = f"Invalid input source map for {file}: {e}"
                raise SourceMapError(msg) from e
            relative_to = to_url_path(posixpath.dirname(resolved.sources_relative_to))
            self.generator.apply_source_map(consumer, file, relative_to)
            logger.debug("Applied input source map %s to %s", resolved.url, file)

    def serialize(self) -> dict[str, Any]:
        """The finalized map in serialized (plain dict) form."""
        if not self._finalized:
            msg = "Source map requested before finalize()"
            raise SourceMapError(msg)
        return self.generator.to_dict()

    # =========================================================================
    # Recording
    # =========================================================================

    def emit(self, text: str, location: SourceLocation | None = None) -> None:
        """Record ``text`` at the current position, then advance past it.

        Locations without a real line (synthetic nodes) record nothing.
        """
        if location is not None and location.lineno >= 1:
            source = to_url_path(location.source_file or DEFAULT_SOURCE)
            self._record(
                SourceMapping(
                    generated_line=self.line,
                    generated_column=max(self.column - 1, 0),
                    source=source,
                    original_line=location.lineno,
                    original_column=max(location.col_offset - 1, 0),
                )
            )
            self._add_file(source, location.content)
        self._advance(text)

    def _record(self, mapping: SourceMapping) -> None:
        self.generator.add_mapping(
            (mapping.generated_line, mapping.generated_column),
            (mapping.original_line or 1, mapping.original_column or 0),
            source=mapping.source,
        )
        self._recorded.append(mapping)

    def _add_file(self, source: str, content: str | None) -> None:
        if content is None or source in self.files:
            return
        self.files[source] = content

    def _advance(self, text: str) -> None:
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)

    # =========================================================================
    # Fragment capture for the compile cache
    # =========================================================================

    def mark(self) -> Mark:
        """Remember where a fragment starts."""
        return Mark(index=len(self._recorded), line=self.line, column=self.column)

    def capture(self, mark: Mark) -> tuple[RecordedMapping, ...]:
        """Mappings recorded since ``mark``, relative to the fragment start."""
        start_column = max(mark.column - 1, 0)
        captured = []
        for mapping in self._recorded[mark.index :]:
            line_delta = mapping.generated_line - mark.line
            column = mapping.generated_column
            if line_delta == 0:
                column -= start_column
            captured.append(
                RecordedMapping(
                    line_delta=line_delta,
                    column=column,
                    source=mapping.source or DEFAULT_SOURCE,
                    original_line=mapping.original_line or 1,
                    original_column=mapping.original_column or 0,
                )
            )
        return tuple(captured)

    def replay(self, text: str, mappings: tuple[RecordedMapping, ...]) -> None:
        """Re-record a cached fragment at the current position, then advance past it."""
        start_line = self.line
        start_column = max(self.column - 1, 0)
        for record in mappings:
            column = record.column + start_column if record.line_delta == 0 else record.column
            self._record(
                SourceMapping(
                    generated_line=start_line + record.line_delta,
                    generated_column=column,
                    source=record.source,
                    original_line=record.original_line,
                    original_column=record.original_column,
                )
            )
        self._advance(text)
