"""Compile dispatcher: AST in, CSS (and optionally a source map) out.

compile() is the single entry point. Per call it:

1. Rejects a missing node before doing anything else.
2. Selects the renderer from ``options.compress``.
3. Attaches a SourceMapTracker when ``options.sourcemap`` is set.
4. Renders through a Compiler, which memoizes every subtree render in a
   cache owned by this call alone.
5. Finalizes the map and returns ``CompileResult(code, map)``, or returns
   the bare CSS string when no map was requested.

Example:
    >>> from cascada import compile
    >>> compile({"type": "rule", "selectors": ["a"],
    ...          "declarations": [{"type": "declaration", "property": "color", "value": "red"}]})
    'a {\\n  color: red;\\n}'

"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cascada.cache import CompileCache, MemoEntry
from cascada.config import CompileOptions, resolve_options
from cascada.errors import InvalidInputError
from cascada.nodes import Node
from cascada.profiling import get_compile_accumulator
from cascada.renderers.base import BaseRenderer
from cascada.renderers.compressed import CompressedRenderer
from cascada.renderers.identity import IdentityRenderer
from cascada.serialization import from_dict
from cascada.sourcemap.generator import SourceMapGenerator
from cascada.sourcemap.tracker import SourceMapTracker
from cascada.utils.logger import get_logger
from cascada.visitor import count_nodes

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CompileResult:
    """CSS plus the source map describing the same compilation pass.

    ``map`` is the live SourceMapGenerator in ``"generator"`` mode and the
    serialized v3 dict otherwise.
    """

    code: str
    map: SourceMapGenerator | dict[str, Any]


def renderer_for(options: CompileOptions) -> BaseRenderer:
    """Build the rendering strategy selected by ``options.compress``."""
    if options.compress:
        return CompressedRenderer(options)
    return IdentityRenderer(options)


class Compiler:
    """Memoizing dispatcher for one compile.

    Binds itself as the renderer's child compiler, so every subtree the
    renderer descends into is looked up in the cache first. When a tracker
    is attached, cached fragments carry their mappings and are replayed at
    the current output position on a hit.

    """

    __slots__ = ("renderer", "cache", "tracker")

    def __init__(self, renderer: BaseRenderer, *, tracker: SourceMapTracker | None = None) -> None:
        self.renderer = renderer
        self.cache = CompileCache()
        self.tracker = tracker
        renderer.bind_compiler(self.compile_node)

    def compile_node(self, node: Node) -> str:
        """Render ``node``, or return the cached text of an equal subtree."""
        key = self.cache.key_for(self.renderer.memo_scope(), node)
        entry = self.cache.get(key)
        if entry is not None:
            if self.tracker is not None:
                self.tracker.replay(entry.code, entry.mappings)
            return entry.code

        if self.tracker is None:
            code = self.renderer.visit(node)
            self.cache.put(key, MemoEntry(code))
            return code

        mark = self.tracker.mark()
        code = self.renderer.visit(node)
        self.cache.put(key, MemoEntry(code, self.tracker.capture(mark)))
        return code


def compile(  # noqa: A001
    node: Node | Mapping[str, Any] | None,
    options: CompileOptions | Mapping[str, Any] | None = None,
) -> str | CompileResult:
    """Compile a stylesheet AST to CSS.

    Args:
        node: Root node (usually a Stylesheet), or the same tree in JSON AST
            shape (``{"type": "stylesheet", ...}``)
        options: CompileOptions or a mapping of options; ``compress`` selects
            compressed output, ``sourcemap`` requests a map (``True`` for the
            serialized dict, ``"generator"`` for the live object). Other keys
            are passed to the renderer untouched.

    Returns:
        CSS string, or CompileResult(code, map) when a source map was requested

    Raises:
        InvalidInputError: If ``node`` is missing or empty
        RenderError: If the renderer meets a node it cannot render
        SourceMapError: If an input source map cannot be applied
    """
    # None, empty mappings and any other falsy non-node value
    if not isinstance(node, Node) and not node:
        raise InvalidInputError()

    opts = resolve_options(options)
    if isinstance(node, Mapping):
        node = from_dict(node)

    renderer = renderer_for(opts)
    logger.debug("Compiling %s with %s", type(node).__name__, type(renderer).__name__)

    tracker: SourceMapTracker | None = None
    if opts.sourcemap:
        tracker = SourceMapTracker(opts)
        tracker.attach(renderer)

    compiler = Compiler(renderer, tracker=tracker)
    code = compiler.compile_node(node)
    logger.debug(
        "Compile cache: %d entries, %d hits, %d misses",
        len(compiler.cache),
        compiler.cache.hits,
        compiler.cache.misses,
    )

    acc = get_compile_accumulator()
    if acc is not None:
        acc.record_compile(
            node_count=count_nodes(node),
            output_length=len(code),
            cache_hits=compiler.cache.hits,
            cache_misses=compiler.cache.misses,
        )

    if tracker is None:
        return code

    tracker.finalize()
    source_map = tracker.generator if opts.wants_generator else tracker.serialize()
    return CompileResult(code=code, map=source_map)
