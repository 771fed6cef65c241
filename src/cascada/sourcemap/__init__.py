"""Source map support for Cascada.

- SourceMapGenerator: structured v3 map (live object for ``"generator"`` mode)
- SourceMapConsumer: decoder used to chain maps from preprocessed sources
- SourceMapTracker: attaches to a renderer and records mappings as it emits
- resolve_source_map: loads the map a stylesheet's sourceMappingURL points to

"""

from cascada.sourcemap.consumer import OriginalPosition, SourceMapConsumer
from cascada.sourcemap.generator import SourceMapGenerator, SourceMapping
from cascada.sourcemap.resolve import ResolvedSourceMap, resolve_source_map
from cascada.sourcemap.tracker import SourceMapTracker

__all__ = [
    "OriginalPosition",
    "ResolvedSourceMap",
    "SourceMapConsumer",
    "SourceMapGenerator",
    "SourceMapTracker",
    "SourceMapping",
    "resolve_source_map",
]
