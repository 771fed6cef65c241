"""Cascada renderers.

Renderers convert typed AST nodes into CSS text.

Available Renderers:
- IdentityRenderer: Indented, human-readable output
- CompressedRenderer: Space-optimized output

Thread Safety:
Renderers keep per-compile state (indentation level, attached source map
tracker). Build one per compile; compile() does this for you.

"""

from cascada.renderers.base import BaseRenderer
from cascada.renderers.compressed import CompressedRenderer
from cascada.renderers.identity import IdentityRenderer
from cascada.renderers.protocol import CssRenderer

__all__ = ["BaseRenderer", "CompressedRenderer", "CssRenderer", "IdentityRenderer"]
