"""Compile configuration for Cascada.

CompileOptions is built once per compile() call and read by the dispatcher,
the selected renderer and the source map tracker.

Usage:
    from cascada import compile
    from cascada.config import CompileOptions

    css = compile(sheet, CompileOptions(compress=True))

    # Or from a plain mapping, using the JSON-style option names
    result = compile(sheet, {"sourcemap": True, "inputSourcemaps": False})

"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

SourceMapMode = bool | Literal["generator"]

# Accepted spellings for each option, JSON-style names included.
_ALIASES: dict[str, str] = {
    "compress": "compress",
    "sourcemap": "sourcemap",
    "indent": "indent",
    "input_sourcemaps": "input_sourcemaps",
    "inputSourcemaps": "input_sourcemaps",
}


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Immutable compile configuration.

    Attributes:
        compress: Use the space-optimized renderer
        sourcemap: False for plain output, True for ``{code, map}`` with the
            serialized map, ``"generator"`` for the live map object
        indent: Indentation unit used by the identity renderer
        input_sourcemaps: Chain source maps referenced from original sources
        extra: Renderer-specific options, passed through untouched

    """

    compress: bool = False
    sourcemap: SourceMapMode = False
    indent: str = "  "
    input_sourcemaps: bool = True
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def wants_generator(self) -> bool:
        """True when the live map object was requested."""
        return self.sourcemap == "generator"

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "CompileOptions":
        """Create CompileOptions from a mapping.

        Recognized keys (and their JSON-style aliases) become fields; every
        other key is collected into ``extra`` for the renderer.

        Args:
            config_dict: Mapping of option names to values.

        Returns:
            New CompileOptions instance.

        Example:
            >>> options = CompileOptions.from_dict({
            ...     "compress": True,
            ...     "inputSourcemaps": False,
            ...     "charset": "utf-8",
            ... })
            >>> options.input_sourcemaps, options.extra
            (False, {'charset': 'utf-8'})

        """
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _ALIASES.get(key)
            if name is None:
                extra[key] = value
            else:
                known[name] = value

        if "compress" in known:
            known["compress"] = bool(known["compress"])
        if "input_sourcemaps" in known:
            known["input_sourcemaps"] = known["input_sourcemaps"] is not False
        if "sourcemap" in known:
            known["sourcemap"] = _coerce_sourcemap(known["sourcemap"])
        if not isinstance(known.get("indent", ""), str):
            known.pop("indent")
        return cls(**known, extra=extra)


def _coerce_sourcemap(value: Any) -> SourceMapMode:
    """Normalize a sourcemap option: any truthy value but "generator" means True."""
    if value == "generator":
        return "generator"
    return bool(value)


def resolve_options(options: "CompileOptions | Mapping[str, Any] | None") -> CompileOptions:
    """Return a CompileOptions for whatever the caller passed."""
    if options is None:
        return CompileOptions()
    if isinstance(options, CompileOptions):
        return options
    return CompileOptions.from_dict(options)


__all__ = [
    "CompileOptions",
    "SourceMapMode",
    "resolve_options",
]
