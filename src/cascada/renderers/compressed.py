"""Compressed renderer: space-optimized CSS.

Drops comments and every piece of optional whitespace.

Example:
    >>> from cascada.nodes import Declaration, Rule
    >>> rule = Rule(selectors=("a",), declarations=(Declaration(property="color", value="red"),))
    >>> CompressedRenderer().render(rule)
    'a{color:red;}'
"""

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


class CompressedRenderer(BaseRenderer):
    """Render AST to minimal CSS.

    Output does not depend on nesting depth, so the default memo scope
    applies.

    """

    __slots__ = ()

    def _braced(self, head: str, node: Node, children: tuple[Node, ...]) -> str:
        sb = StringBuilder()
        sb.append(self.emit(head, node.location))
        sb.append(self.emit("{"))
        sb.append(self.map_visit(children))
        sb.append(self.emit("}"))
        return sb.build()

    def _render_stylesheet(self, node: Stylesheet) -> str:
        return self.map_visit(node.rules)

    def _render_comment(self, node: Comment) -> str:
        # Keeps the location so the map still points at the comment.
        return self.emit("", node.location)

    def _render_media(self, node: Media) -> str:
        return self._braced(f"@media {node.media}", node, node.rules)

    def _render_supports(self, node: Supports) -> str:
        return self._braced(f"@supports {node.supports}", node, node.rules)

    def _render_document(self, node: Document) -> str:
        return self._braced(f"@{node.vendor or ''}document {node.document}", node, node.rules)

    def _render_host(self, node: Host) -> str:
        return self._braced("@host", node, node.rules)

    def _render_keyframes(self, node: Keyframes) -> str:
        return self._braced(f"@{node.vendor or ''}keyframes {node.name}", node, node.keyframes)

    def _render_keyframe(self, node: Keyframe) -> str:
        return self._braced(",".join(node.values), node, node.declarations)

    def _render_page(self, node: Page) -> str:
        return self._braced(f"@page {', '.join(node.selectors)}", node, node.declarations)

    def _render_font_face(self, node: FontFace) -> str:
        return self._braced("@font-face", node, node.declarations)

    def _render_rule(self, node: Rule) -> str:
        if not node.declarations:
            return ""
        return self._braced(",".join(node.selectors), node, node.declarations)

    def _render_declaration(self, node: Declaration) -> str:
        sb = StringBuilder()
        sb.append(self.emit(f"{node.property}:{node.value}", node.location))
        sb.append(self.emit(";"))
        return sb.build()
