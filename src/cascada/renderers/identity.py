"""Identity renderer: readable, indented CSS.

Output keeps the conventional layout: one declaration per line, nested
rules indented, blank lines between top-level rules.

Example:
    >>> from cascada.nodes import Declaration, Rule
    >>> rule = Rule(selectors=("a",), declarations=(Declaration(property="color", value="red"),))
    >>> IdentityRenderer().render(rule)
    'a {\\n  color: red;\\n}'
"""

from collections.abc import Hashable

from cascada.config import CompileOptions
from cascada.nodes import (
    Comment,
    Declaration,
    Document,
    FontFace,
    Host,
    Keyframe,
    Keyframes,
    Media,
    Node,
    Page,
    Rule,
    Stylesheet,
    Supports,
)
from cascada.renderers.base import BaseRenderer
from cascada.stringbuilder import StringBuilder


class IdentityRenderer(BaseRenderer):
    """Render AST to indented CSS.

    Indentation is tracked as a level that starts at 1; ``indent()`` yields
    ``level - 1`` copies of the indentation unit and ``indent(n)`` shifts the
    level by ``n`` while emitting nothing.

    """

    __slots__ = ("_indentation", "_level")

    def __init__(self, options: CompileOptions | None = None) -> None:
        super().__init__(options)
        self._indentation = self.options.indent
        self._level = 1

    def memo_scope(self) -> Hashable:
        # Same node, different depth, different text.
        return self._level

    def indent(self, level: int | None = None) -> str:
        """Return the current indentation, or shift the level by ``level``."""
        if level is not None:
            self._level += level
            return ""
        return self._indentation * (self._level - 1)

    def _block(self, head: str, node: Node, rules: tuple[Node, ...], opener: str = " {\n") -> str:
        """Shared layout for at-rules that wrap nested rules."""
        sb = StringBuilder()
        sb.append(self.emit(head, node.location))
        sb.append(self.emit(opener + self.indent(1)))
        sb.append(self.map_visit(rules, "\n\n"))
        sb.append(self.emit(self.indent(-1) + "\n}"))
        return sb.build()

    def _declaration_block(self, head: str, node: Node, declarations: tuple[Node, ...]) -> str:
        """Shared layout for @page and @font-face."""
        sb = StringBuilder()
        sb.append(self.emit(head, node.location))
        sb.append(self.emit("{\n"))
        sb.append(self.emit(self.indent(1)))
        sb.append(self.map_visit(declarations, "\n"))
        sb.append(self.emit(self.indent(-1)))
        sb.append(self.emit("\n}"))
        return sb.build()

    def _render_stylesheet(self, node: Stylesheet) -> str:
        return self.map_visit(node.rules, "\n\n")

    def _render_comment(self, node: Comment) -> str:
        return self.emit(f"{self.indent()}/*{node.comment}*/", node.location)

    def _render_media(self, node: Media) -> str:
        return self._block(f"@media {node.media}", node, node.rules)

    def _render_supports(self, node: Supports) -> str:
        return self._block(f"@supports {node.supports}", node, node.rules)

    def _render_document(self, node: Document) -> str:
        head = f"@{node.vendor or ''}document {node.document}"
        return self._block(head, node, node.rules, opener="  {\n")

    def _render_host(self, node: Host) -> str:
        return self._block("@host", node, node.rules)

    def _render_keyframes(self, node: Keyframes) -> str:
        sb = StringBuilder()
        sb.append(self.emit(f"@{node.vendor or ''}keyframes {node.name}", node.location))
        sb.append(self.emit(" {\n" + self.indent(1)))
        sb.append(self.map_visit(node.keyframes, "\n"))
        sb.append(self.emit(self.indent(-1) + "}"))
        return sb.build()

    def _render_keyframe(self, node: Keyframe) -> str:
        sb = StringBuilder()
        sb.append(self.emit(self.indent()))
        sb.append(self.emit(", ".join(node.values), node.location))
        sb.append(self.emit(" {\n" + self.indent(1)))
        sb.append(self.map_visit(node.declarations, "\n"))
        sb.append(self.emit(self.indent(-1) + "\n" + self.indent() + "}\n"))
        return sb.build()

    def _render_page(self, node: Page) -> str:
        sel = ", ".join(node.selectors) + " " if node.selectors else ""
        return self._declaration_block(f"@page {sel}", node, node.declarations)

    def _render_font_face(self, node: FontFace) -> str:
        return self._declaration_block("@font-face ", node, node.declarations)

    def _render_rule(self, node: Rule) -> str:
        if not node.declarations:
            return ""
        indent = self.indent()
        sb = StringBuilder()
        sb.append(self.emit(",\n".join(indent + s for s in node.selectors), node.location))
        sb.append(self.emit(" {\n"))
        sb.append(self.emit(self.indent(1)))
        sb.append(self.map_visit(node.declarations, "\n"))
        sb.append(self.emit(self.indent(-1)))
        sb.append(self.emit("\n" + self.indent() + "}"))
        return sb.build()

    def _render_declaration(self, node: Declaration) -> str:
        sb = StringBuilder()
        sb.append(self.emit(self.indent()))
        sb.append(self.emit(f"{node.property}: {node.value}", node.location))
        sb.append(self.emit(";"))
        return sb.build()
