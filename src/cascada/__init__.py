"""
Cascada: Stylesheet AST to CSS, with source maps

Renders a typed stylesheet syntax tree to CSS text, readable or compressed,
and optionally produces a v3 source map back to the original sources.

Quick Start:
    >>> from cascada import Declaration, Rule, compile
    >>> rule = Rule(selectors=("a",), declarations=(Declaration(property="color", value="red"),))
    >>> print(compile(rule))
    a {
      color: red;
    }
    >>> compile(rule, {"compress": True})
    'a{color:red;}'

Source Maps:
    >>> result = compile(sheet, {"sourcemap": True})
    >>> result.code, result.map["mappings"]

    >>> # The live generator instead of the serialized dict
    >>> result = compile(sheet, {"sourcemap": "generator"})
    >>> result.map.generated_positions_for("site.css", 3)

Trees from other tools:
    >>> compile({"type": "stylesheet", "stylesheet": {"rules": [...]}})
"""

from cascada.cache import CompileCache, MemoEntry
from cascada.compiler import CompileResult, Compiler, compile, renderer_for
from cascada.config import CompileOptions
from cascada.errors import CascadaError, InvalidInputError, RenderError, SourceMapError
from cascada.location import SourceLocation
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
from cascada.profiling import CompileAccumulator, get_compile_accumulator, profiled_compile
from cascada.renderers import BaseRenderer, CompressedRenderer, CssRenderer, IdentityRenderer
from cascada.serialization import from_dict, from_json, to_dict, to_json
from cascada.sourcemap import SourceMapConsumer, SourceMapGenerator, SourceMapTracker
from cascada.visitor import BaseVisitor, count_nodes, iter_nodes

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "compile",
    "CompileResult",
    "Compiler",
    "renderer_for",
    # Compile cache
    "CompileCache",
    "MemoEntry",
    # Nodes
    "Node",
    "Stylesheet",
    "Rule",
    "Declaration",
    "Comment",
    "Import",
    "Charset",
    "Namespace",
    "CustomMedia",
    "Media",
    "Supports",
    "Document",
    "Host",
    "Keyframes",
    "Keyframe",
    "Page",
    "FontFace",
    # Renderers
    "BaseRenderer",
    "CssRenderer",
    "IdentityRenderer",
    "CompressedRenderer",
    # Source maps
    "SourceMapGenerator",
    "SourceMapConsumer",
    "SourceMapTracker",
    # Visitor
    "BaseVisitor",
    "count_nodes",
    "iter_nodes",
    # Profiling
    "CompileAccumulator",
    "profiled_compile",
    "get_compile_accumulator",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration
    "CompileOptions",
    # Errors
    "CascadaError",
    "InvalidInputError",
    "RenderError",
    "SourceMapError",
    # Location
    "SourceLocation",
]
