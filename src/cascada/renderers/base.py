"""Shared machinery for the built-in renderers.

BaseRenderer owns the three hooks every strategy is written against:

- ``emit(text, location)``: every output fragment passes through here, in
  output order. With a source map tracker attached, located fragments
  record a mapping.
- ``visit(node)``: match-based dispatch to ``_render_<kind>``.
- ``map_visit(nodes, delim)``: render a sequence of children, routing each
  child through the dispatcher so repeated subtrees hit the compile cache.

Subclasses implement the ``_render_*`` methods and return strings.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Hashable, Sequence
from typing import TYPE_CHECKING

from cascada.config import CompileOptions
from cascada.errors import RenderError
from cascada.nodes import (
    Charset,
    Comment,
    CustomMedia,
    Declaration,
    Document,
    FontFace,
    Host,
    Import,
    Keyframe,
    Keyframes,
    Media,
    Namespace,
    Node,
    Page,
    Rule,
    Stylesheet,
    Supports,
)
from cascada.stringbuilder import StringBuilder

if TYPE_CHECKING:
    from cascada.location import SourceLocation
    from cascada.sourcemap.tracker import SourceMapTracker

# Comments pointing at an input source map are dropped from mapped output.
SOURCE_MAPPING_URL_COMMENT = re.compile(r"^# sourceMappingURL=")


class BaseRenderer:
    """Base class for stylesheet renderers.

    A renderer instance carries per-compile state (the identity renderer's
    indentation level), so build a new one for every compile.

    """

    __slots__ = ("options", "_tracker", "_child_compiler")

    def __init__(self, options: CompileOptions | None = None) -> None:
        """Initialize renderer.

        Args:
            options: Compile options; renderer-specific settings live in
                ``options.extra``
        """
        self.options = options or CompileOptions()
        self._tracker: SourceMapTracker | None = None
        self._child_compiler: Callable[[Node], str] | None = None

    # =========================================================================
    # Wiring
    # =========================================================================

    def bind_compiler(self, compile_node: Callable[[Node], str]) -> None:
        """Route child renders through ``compile_node`` (the memoizing dispatcher)."""
        self._child_compiler = compile_node

    def attach_tracker(self, tracker: SourceMapTracker) -> None:
        """Make this renderer map-aware for the rest of its life."""
        self._tracker = tracker

    @property
    def tracker(self) -> SourceMapTracker | None:
        return self._tracker

    def memo_scope(self) -> Hashable:
        """Rendering context that output depends on besides the node itself."""
        return None

    # =========================================================================
    # Core hooks
    # =========================================================================

    def render(self, node: Node) -> str:
        """Render a node (usually a Stylesheet) to CSS."""
        return self.visit(node)

    def emit(self, text: str, location: SourceLocation | None = None) -> str:
        """Pass an output fragment through, recording its position if tracked."""
        if self._tracker is not None:
            self._tracker.emit(text, location)
        return text

    def visit(self, node: Node) -> str:
        """Dispatch a node to its ``_render_*`` method."""
        match node:
            case Stylesheet():
                return self._render_stylesheet(node)
            case Rule():
                return self._render_rule(node)
            case Declaration():
                return self._render_declaration(node)
            case Comment():
                if self._tracker is not None and SOURCE_MAPPING_URL_COMMENT.match(node.comment):
                    return self.emit("", node.location)
                return self._render_comment(node)
            case Import():
                return self._render_import(node)
            case Charset():
                return self._render_charset(node)
            case Namespace():
                return self._render_namespace(node)
            case CustomMedia():
                return self._render_custom_media(node)
            case Media():
                return self._render_media(node)
            case Supports():
                return self._render_supports(node)
            case Document():
                return self._render_document(node)
            case Host():
                return self._render_host(node)
            case Keyframes():
                return self._render_keyframes(node)
            case Keyframe():
                return self._render_keyframe(node)
            case Page():
                return self._render_page(node)
            case FontFace():
                return self._render_font_face(node)
            case _:
                msg = f"Unknown node type: {type(node).__name__}"
                raise RenderError(msg, getattr(node, "location", None))

    def visit_child(self, node: Node) -> str:
        """Render a child node, through the dispatcher when one is bound."""
        if self._child_compiler is not None:
            return self._child_compiler(node)
        return self.visit(node)

    def map_visit(self, nodes: Sequence[Node], delim: str = "") -> str:
        """Render ``nodes`` in order, emitting ``delim`` between them."""
        sb = StringBuilder()
        last = len(nodes) - 1
        for i, child in enumerate(nodes):
            sb.append(self.visit_child(child))
            if delim and i < last:
                sb.append(self.emit(delim))
        return sb.build()

    # =========================================================================
    # Per-node rendering (implemented by subclasses)
    # =========================================================================

    def _render_stylesheet(self, node: Stylesheet) -> str:
        raise NotImplementedError

    def _render_rule(self, node: Rule) -> str:
        raise NotImplementedError

    def _render_declaration(self, node: Declaration) -> str:
        raise NotImplementedError

    def _render_comment(self, node: Comment) -> str:
        raise NotImplementedError

    def _render_import(self, node: Import) -> str:
        return self.emit(f"@import {node.import_};", node.location)

    def _render_charset(self, node: Charset) -> str:
        return self.emit(f"@charset {node.charset};", node.location)

    def _render_namespace(self, node: Namespace) -> str:
        return self.emit(f"@namespace {node.namespace};", node.location)

    def _render_custom_media(self, node: CustomMedia) -> str:
        return self.emit(f"@custom-media {node.name} {node.media};", node.location)

    def _render_media(self, node: Media) -> str:
        raise NotImplementedError

    def _render_supports(self, node: Supports) -> str:
        raise NotImplementedError

    def _render_document(self, node: Document) -> str:
        raise NotImplementedError

    def _render_host(self, node: Host) -> str:
        raise NotImplementedError

    def _render_keyframes(self, node: Keyframes) -> str:
        raise NotImplementedError

    def _render_keyframe(self, node: Keyframe) -> str:
        raise NotImplementedError

    def _render_page(self, node: Page) -> str:
        raise NotImplementedError

    def _render_font_face(self, node: FontFace) -> str:
        raise NotImplementedError
