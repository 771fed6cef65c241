"""Exception classes for Cascada.

Provides standardized exceptions for error handling throughout Cascada.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cascada.location import SourceLocation


class CascadaError(Exception):
    """Base exception for all Cascada errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidInputError(CascadaError):
    """The compile entry point was called without a node.

    Raised before any strategy is selected or any cache is built.
    """

    def __init__(self, message: str = "AST node is required for compilation") -> None:
        super().__init__(message)


class RenderError(CascadaError):
    """Error during stylesheet rendering.

    Raised when a renderer encounters a node it cannot render.
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        """Initialize render error with optional location.

        Args:
            message: Error description
            location: Location of the offending node (optional)
        """
        self.message = message
        self.location = location
        if location is not None and location.lineno:
            message = f"{location} {message}"
        super().__init__(message)


class SourceMapError(CascadaError):
    """Error in source map generation.

    Raised when the tracker lifecycle is driven out of order (finalize
    before attach, finalize twice) or when an input source map referenced
    by a stylesheet cannot be read or decoded.
    """

    pass
