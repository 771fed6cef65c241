"""Tests for the identity and compressed renderers, node kind by node kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import pytest

from cascada import compile
from cascada.errors import RenderError
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
from cascada.renderers import CompressedRenderer, IdentityRenderer


def _decl(prop: str, value: str) -> Declaration:
    return Declaration(property=prop, value=value)


RED = Rule(selectors=("a",), declarations=(_decl("color", "red"),))
FADE = Keyframes(
    name="fade",
    keyframes=(
        Keyframe(values=("from",), declarations=(_decl("opacity", "0"),)),
        Keyframe(values=("to",), declarations=(_decl("opacity", "1"),)),
    ),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class Viewport(Node):
    kind: ClassVar[str] = "viewport"


def identity(node: Node) -> str:
    return compile(node)  # type: ignore[return-value]


def compressed(node: Node) -> str:
    return compile(node, {"compress": True})  # type: ignore[return-value]


class TestIdentityRenderer:
    """Readable output."""

    def test_declaration(self) -> None:
        assert identity(_decl("color", "red")) == "color: red;"

    def test_rule_with_several_selectors(self) -> None:
        rule = Rule(selectors=("a", "b"), declarations=(_decl("color", "red"), _decl("margin", "0")))
        assert identity(rule) == "a,\nb {\n  color: red;\n  margin: 0;\n}"

    def test_rule_without_declarations_renders_nothing(self) -> None:
        assert identity(Rule(selectors=("a",))) == ""

    def test_empty_rule_keeps_separator(self) -> None:
        sheet = Stylesheet(rules=(Rule(selectors=("a",)), RED))
        assert identity(sheet) == "\n\na {\n  color: red;\n}"

    def test_comment(self) -> None:
        assert identity(Comment(comment=" hi ")) == "/* hi */"

    def test_comment_between_rules(self) -> None:
        sheet = Stylesheet(rules=(Comment(comment=" note "), RED))
        assert identity(sheet) == "/* note */\n\na {\n  color: red;\n}"

    def test_comment_inside_rule_is_indented(self) -> None:
        rule = Rule(selectors=("a",), declarations=(Comment(comment=" c "), _decl("color", "red")))
        assert identity(rule) == "a {\n  /* c */\n  color: red;\n}"

    def test_empty_stylesheet(self) -> None:
        assert identity(Stylesheet()) == ""

    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            (Import(import_='url("theme.css")'), '@import url("theme.css");'),
            (Charset(charset='"utf-8"'), '@charset "utf-8";'),
            (
                Namespace(namespace="svg url(http://www.w3.org/2000/svg)"),
                "@namespace svg url(http://www.w3.org/2000/svg);",
            ),
            (
                CustomMedia(name="--small", media="(max-width: 30em)"),
                "@custom-media --small (max-width: 30em);",
            ),
        ],
    )
    def test_single_line_at_rules(self, node: Node, expected: str) -> None:
        assert identity(node) == expected

    def test_media(self) -> None:
        node = Media(media="screen", rules=(RED,))
        assert identity(node) == "@media screen {\n  a {\n    color: red;\n  }\n}"

    def test_media_separates_rules_with_blank_line(self) -> None:
        blue = Rule(selectors=("b",), declarations=(_decl("color", "blue"),))
        node = Media(media="screen", rules=(RED, blue))
        assert identity(node) == (
            "@media screen {\n  a {\n    color: red;\n  }\n\n  b {\n    color: blue;\n  }\n}"
        )

    def test_supports(self) -> None:
        node = Supports(supports="(display: grid)", rules=(RED,))
        assert identity(node) == "@supports (display: grid) {\n  a {\n    color: red;\n  }\n}"

    def test_document_with_vendor(self) -> None:
        node = Document(document="url-prefix()", vendor="-moz-", rules=(RED,))
        assert identity(node) == "@-moz-document url-prefix()  {\n  a {\n    color: red;\n  }\n}"

    def test_host(self) -> None:
        assert identity(Host(rules=(RED,))) == "@host {\n  a {\n    color: red;\n  }\n}"

    def test_keyframes(self) -> None:
        assert identity(FADE) == (
            "@keyframes fade {\n"
            "  from {\n    opacity: 0;\n  }\n"
            "\n"
            "  to {\n    opacity: 1;\n  }\n"
            "}"
        )

    def test_vendor_keyframes_with_several_values(self) -> None:
        node = Keyframes(
            name="spin",
            vendor="-webkit-",
            keyframes=(Keyframe(values=("0%", "100%"), declarations=(_decl("opacity", "0"),)),),
        )
        assert identity(node) == "@-webkit-keyframes spin {\n  0%, 100% {\n    opacity: 0;\n  }\n}"

    def test_page_with_selector(self) -> None:
        node = Page(selectors=(":first",), declarations=(_decl("margin", "1in"),))
        assert identity(node) == "@page :first {\n  margin: 1in;\n}"

    def test_page_without_selector(self) -> None:
        node = Page(declarations=(_decl("margin", "1in"),))
        assert identity(node) == "@page {\n  margin: 1in;\n}"

    def test_font_face(self) -> None:
        node = FontFace(declarations=(_decl("font-family", "Inter"), _decl("src", "url(inter.woff2)")))
        assert identity(node) == "@font-face {\n  font-family: Inter;\n  src: url(inter.woff2);\n}"

    def test_deep_nesting(self) -> None:
        node = Supports(supports="(display: grid)", rules=(Media(media="print", rules=(RED,)),))
        assert identity(node) == (
            "@supports (display: grid) {\n"
            "@media print {\n"
            "    a {\n      color: red;\n    }\n"
            "}\n"
            "}"
        )

    def test_indent_levels(self) -> None:
        renderer = IdentityRenderer()
        assert renderer.indent() == ""
        assert renderer.indent(2) == ""
        assert renderer.indent() == "    "
        assert renderer.memo_scope() == 3
        renderer.indent(-2)
        assert renderer.memo_scope() == 1


class TestCompressedRenderer:
    """Space-optimized output."""

    def test_rule(self) -> None:
        rule = Rule(selectors=("a", "b"), declarations=(_decl("color", "red"), _decl("margin", "0")))
        assert compressed(rule) == "a,b{color:red;margin:0;}"

    def test_rule_without_declarations_renders_nothing(self) -> None:
        assert compressed(Stylesheet(rules=(Rule(selectors=("a",)), RED))) == "a{color:red;}"

    def test_comments_are_dropped(self) -> None:
        sheet = Stylesheet(rules=(Comment(comment=" note "), RED, Comment(comment=" end ")))
        assert compressed(sheet) == "a{color:red;}"

    def test_comment_inside_rule_is_dropped(self) -> None:
        rule = Rule(selectors=("a",), declarations=(Comment(comment=" c "), _decl("color", "red")))
        assert compressed(rule) == "a{color:red;}"

    @pytest.mark.parametrize(
        ("node", "expected"),
        [
            (Import(import_='url("theme.css")'), '@import url("theme.css");'),
            (Charset(charset='"utf-8"'), '@charset "utf-8";'),
            (CustomMedia(name="--small", media="(max-width: 30em)"), "@custom-media --small (max-width: 30em);"),
            (Media(media="screen", rules=(RED,)), "@media screen{a{color:red;}}"),
            (Supports(supports="(display: grid)", rules=(RED,)), "@supports (display: grid){a{color:red;}}"),
            (
                Document(document="url-prefix()", vendor="-moz-", rules=(RED,)),
                "@-moz-document url-prefix(){a{color:red;}}",
            ),
            (Host(rules=(RED,)), "@host{a{color:red;}}"),
            (FADE, "@keyframes fade{from{opacity:0;}to{opacity:1;}}"),
            (
                Keyframe(values=("0%", "100%"), declarations=(_decl("opacity", "0"),)),
                "0%,100%{opacity:0;}",
            ),
            (
                Page(selectors=(":first",), declarations=(_decl("margin", "1in"),)),
                "@page :first{margin:1in;}",
            ),
            (Page(declarations=(_decl("margin", "1in"),)), "@page {margin:1in;}"),
            (FontFace(declarations=(_decl("font-family", "Inter"),)), "@font-face{font-family:Inter;}"),
        ],
    )
    def test_node_kinds(self, node: Node, expected: str) -> None:
        assert compressed(node) == expected

    def test_direct_render_matches_compile(self) -> None:
        sheet = Stylesheet(rules=(RED, Media(media="print", rules=(RED,)), FADE))
        assert CompressedRenderer().render(sheet) == compressed(sheet)


class TestUnknownNodes:
    @pytest.mark.parametrize("compress", [False, True])
    def test_unknown_node_raises(self, compress: bool) -> None:
        with pytest.raises(RenderError, match="Unknown node type: Viewport"):
            compile(Viewport(), {"compress": compress})

    def test_error_carries_location(self) -> None:
        loc = SourceLocation(4, 2, source_file="site.css")
        with pytest.raises(RenderError) as exc_info:
            compile(Stylesheet(rules=(Viewport(location=loc),)))
        assert exc_info.value.location == loc
        assert str(exc_info.value).startswith("site.css:4:2 ")
