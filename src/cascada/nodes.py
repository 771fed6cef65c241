"""Typed AST nodes for Cascada.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: the compiler never mutates a caller's tree
- Value equality: structurally equal subtrees compare (and hash) equal
- Pattern matching: renderers dispatch with match statements

Fields are keyword-only so that every node can carry an optional location.
The ``kind`` class attribute is the node's tag in the JSON AST shape.

Node Hierarchy:
Node (base)
├── Stylesheet
├── Rule
├── Declaration
├── Comment
├── Import / Charset / Namespace / CustomMedia    (single-line at-rules)
├── Media / Supports / Document / Host            (at-rules with nested rules)
├── Keyframes / Keyframe
└── Page / FontFace                               (at-rules with declarations)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from cascada.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all AST nodes.

    Nodes built by a parser carry their source location; synthetic nodes
    may leave it unset, in which case no source mapping is recorded.

    """

    kind: ClassVar[str] = "node"

    location: SourceLocation | None = None


# =============================================================================
# Root and rules
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Stylesheet(Node):
    """Root of a parsed stylesheet."""

    kind: ClassVar[str] = "stylesheet"

    rules: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Declaration(Node):
    """A single ``property: value`` pair."""

    kind: ClassVar[str] = "declaration"

    property: str
    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Comment(Node):
    """Comment text, without the ``/*`` and ``*/`` delimiters."""

    kind: ClassVar[str] = "comment"

    comment: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Rule(Node):
    """Style rule.

    CSS: a, b { color: red; }

    Declarations may be interleaved with comments. A rule without any
    declarations renders to nothing.

    """

    kind: ClassVar[str] = "rule"

    selectors: tuple[str, ...]
    declarations: tuple[Declaration | Comment, ...] = ()


# =============================================================================
# Single-line at-rules
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Import(Node):
    """CSS: @import url("theme.css");"""

    kind: ClassVar[str] = "import"

    import_: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Charset(Node):
    """CSS: @charset "utf-8";"""

    kind: ClassVar[str] = "charset"

    charset: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Namespace(Node):
    """CSS: @namespace svg url(http://www.w3.org/2000/svg);"""

    kind: ClassVar[str] = "namespace"

    namespace: str


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomMedia(Node):
    """CSS: @custom-media --small-viewport (max-width: 30em);"""

    kind: ClassVar[str] = "custom-media"

    name: str
    media: str


# =============================================================================
# Grouping at-rules
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Media(Node):
    """CSS: @media screen { ... }"""

    kind: ClassVar[str] = "media"

    media: str
    rules: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Supports(Node):
    """CSS: @supports (display: grid) { ... }"""

    kind: ClassVar[str] = "supports"

    supports: str
    rules: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Document(Node):
    """CSS: @-moz-document url-prefix() { ... }

    ``vendor`` includes the surrounding dashes (``"-moz-"``).

    """

    kind: ClassVar[str] = "document"

    document: str
    vendor: str | None = None
    rules: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Host(Node):
    """CSS: @host { ... }"""

    kind: ClassVar[str] = "host"

    rules: tuple[Node, ...] = ()


# =============================================================================
# Keyframes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Keyframe(Node):
    """One step of a keyframes block.

    CSS: from, 50% { opacity: 0; }

    """

    kind: ClassVar[str] = "keyframe"

    values: tuple[str, ...]
    declarations: tuple[Declaration | Comment, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Keyframes(Node):
    """CSS: @keyframes fade { ... }"""

    kind: ClassVar[str] = "keyframes"

    name: str
    vendor: str | None = None
    keyframes: tuple[Keyframe | Comment, ...] = ()


# =============================================================================
# Declaration blocks
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Page(Node):
    """CSS: @page :first { margin: 1in; }"""

    kind: ClassVar[str] = "page"

    selectors: tuple[str, ...] = ()
    declarations: tuple[Declaration | Comment, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class FontFace(Node):
    """CSS: @font-face { font-family: Inter; }"""

    kind: ClassVar[str] = "font-face"

    declarations: tuple[Declaration | Comment, ...] = ()


#: Every concrete node class, keyed by its JSON tag.
NODE_TYPES: dict[str, type[Node]] = {
    cls.kind: cls
    for cls in (
        Stylesheet,
        Rule,
        Declaration,
        Comment,
        Import,
        Charset,
        Namespace,
        CustomMedia,
        Media,
        Supports,
        Document,
        Host,
        Keyframes,
        Keyframe,
        Page,
        FontFace,
    )
}
