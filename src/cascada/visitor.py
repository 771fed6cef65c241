"""AST visitor for Cascada.

Provides a base visitor class with match-based dispatch, plus helpers for
walking a tree without writing a visitor.

Example: collect every property name:

    class PropertyCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.properties: list[str] = []

        def visit_declaration(self, node: Declaration) -> None:
            self.properties.append(node.property)

    collector = PropertyCollector()
    collector.visit(sheet)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

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


def children_of(node: Node) -> tuple[Node, ...]:
    """Direct child nodes, in document order."""
    match node:
        case Stylesheet() | Media() | Supports() | Document() | Host():
            return node.rules
        case Rule() | Keyframe() | Page() | FontFace():
            return node.declarations
        case Keyframes():
            return node.keyframes
        case _:
            return ()


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant, depth-first, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children_of(current)))


def count_nodes(node: Node) -> int:
    """Number of nodes in the tree rooted at ``node``."""
    return sum(1 for _ in iter_nodes(node))


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        for child in children_of(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_stylesheet(self, node: Stylesheet) -> T:
        return self.visit_default(node)

    def visit_rule(self, node: Rule) -> T:
        return self.visit_default(node)

    def visit_declaration(self, node: Declaration) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_import(self, node: Import) -> T:
        return self.visit_default(node)

    def visit_charset(self, node: Charset) -> T:
        return self.visit_default(node)

    def visit_namespace(self, node: Namespace) -> T:
        return self.visit_default(node)

    def visit_custom_media(self, node: CustomMedia) -> T:
        return self.visit_default(node)

    def visit_media(self, node: Media) -> T:
        return self.visit_default(node)

    def visit_supports(self, node: Supports) -> T:
        return self.visit_default(node)

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_host(self, node: Host) -> T:
        return self.visit_default(node)

    def visit_keyframes(self, node: Keyframes) -> T:
        return self.visit_default(node)

    def visit_keyframe(self, node: Keyframe) -> T:
        return self.visit_default(node)

    def visit_page(self, node: Page) -> T:
        return self.visit_default(node)

    def visit_font_face(self, node: FontFace) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Stylesheet():
                return self.visit_stylesheet(node)
            case Rule():
                return self.visit_rule(node)
            case Declaration():
                return self.visit_declaration(node)
            case Comment():
                return self.visit_comment(node)
            case Import():
                return self.visit_import(node)
            case Charset():
                return self.visit_charset(node)
            case Namespace():
                return self.visit_namespace(node)
            case CustomMedia():
                return self.visit_custom_media(node)
            case Media():
                return self.visit_media(node)
            case Supports():
                return self.visit_supports(node)
            case Document():
                return self.visit_document(node)
            case Host():
                return self.visit_host(node)
            case Keyframes():
                return self.visit_keyframes(node)
            case Keyframe():
                return self.visit_keyframe(node)
            case Page():
                return self.visit_page(node)
            case FontFace():
                return self.visit_font_face(node)
            case _:
                return self.visit_default(node)
