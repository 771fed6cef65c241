"""Source location tracking for stylesheet nodes.

Provides SourceLocation dataclass for tracking where a node came from.
Used by the source map tracker and in error messages.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a stylesheet node.

    Mirrors the ``position`` object carried by CSS AST nodes: a start
    position, an optional end position, the source file name and
    optionally the full source text the node was parsed from.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column (1-indexed)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column (optional)
        source_file: Source file name (optional, defaults to source.css in maps)
        content: Full source text (optional, embedded as sourcesContent)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=5, source_file="site.css")
            >>> str(loc)
            'site.css:3:5'

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None
    content: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "site.css:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically when a location is required.
        """
        return cls(lineno=0, col_offset=0)
