"""CssRenderer protocol: stable interface for rendering strategies.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
Code that only needs CSS text out of a tree can accept any conforming
renderer instead of a concrete class.

Example:
    from cascada.renderers.protocol import CssRenderer

    def render_sheet(renderer: CssRenderer, sheet: Stylesheet) -> str:
        return renderer.render(sheet)

"""

from typing import Protocol

from cascada.nodes import Node


class CssRenderer(Protocol):
    """Protocol for stylesheet renderers.

    Implementations accept any node (usually a Stylesheet) and return
    its textual form. ``IdentityRenderer`` and ``CompressedRenderer``
    conform to this protocol.

    """

    def render(self, node: Node) -> str:
        """Render a node to a string.

        Args:
            node: The node (or subtree root) to render.

        Returns:
            Rendered CSS text.

        """
        ...
