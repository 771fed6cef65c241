"""Tests for the memoizing Compiler and its per-call cache."""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cascada import compile
from cascada.cache import CompileCache, MemoEntry
from cascada.compiler import CompileResult, Compiler
from cascada.config import CompileOptions
from cascada.errors import RenderError
from cascada.location import SourceLocation
from cascada.nodes import Declaration, Media, Rule, Stylesheet
from cascada.profiling import profiled_compile
from cascada.renderers import CompressedRenderer, IdentityRenderer
from cascada.sourcemap import SourceMapTracker


class CountingRenderer(IdentityRenderer):
    """Identity renderer that counts how often each node type is rendered."""

    __slots__ = ("visits",)

    def __init__(self, options: CompileOptions | None = None) -> None:
        super().__init__(options)
        self.visits: Counter[str] = Counter()

    def visit(self, node):  # type: ignore[no-untyped-def]
        self.visits[type(node).__name__] += 1
        return super().visit(node)


def _red_rule(location: SourceLocation | None = None) -> Rule:
    return Rule(
        selectors=("a",),
        declarations=(Declaration(property="color", value="red"),),
        location=location,
    )


class TestMemoization:
    """Structurally equal subtrees render once per compile."""

    def test_repeated_rule_rendered_once(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)
        sheet = Stylesheet(rules=(_red_rule(), _red_rule()))

        code = compiler.compile_node(sheet)

        assert code == "a {\n  color: red;\n}\n\na {\n  color: red;\n}"
        assert renderer.visits["Rule"] == 1
        assert renderer.visits["Declaration"] == 1
        assert compiler.cache.hits == 1
        assert compiler.cache.misses == 3

    def test_same_node_twice_returns_cached_text(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)
        rule = _red_rule()

        first = compiler.compile_node(rule)
        second = compiler.compile_node(rule)

        assert first == second
        assert renderer.visits["Rule"] == 1

    def test_equal_but_distinct_objects_share_entry(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)
        a, b = _red_rule(), _red_rule()
        assert a is not b

        compiler.compile_node(a)
        compiler.compile_node(b)

        assert renderer.visits["Rule"] == 1
        assert len(compiler.cache) == 2  # rule + declaration

    def test_different_values_do_not_collide(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)
        blue = Rule(selectors=("a",), declarations=(Declaration(property="color", value="blue"),))

        red_css = compiler.compile_node(_red_rule())
        blue_css = compiler.compile_node(blue)

        assert red_css != blue_css
        assert blue_css == "a {\n  color: blue;\n}"
        assert renderer.visits["Rule"] == 2

    def test_location_is_part_of_the_key(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)

        compiler.compile_node(_red_rule(SourceLocation(1, 1)))
        compiler.compile_node(_red_rule(SourceLocation(9, 1)))

        assert renderer.visits["Rule"] == 2

    def test_nesting_depth_scopes_identity_entries(self) -> None:
        renderer = CountingRenderer()
        compiler = Compiler(renderer)
        sheet = Stylesheet(rules=(_red_rule(), Media(media="print", rules=(_red_rule(),))))

        code = compiler.compile_node(sheet)

        assert code == (
            "a {\n  color: red;\n}\n\n@media print {\n  a {\n    color: red;\n  }\n}"
        )
        assert renderer.visits["Rule"] == 2

    def test_compressed_output_ignores_depth(self) -> None:
        renderer = CompressedRenderer()
        compiler = Compiler(renderer)
        sheet = Stylesheet(rules=(_red_rule(), Media(media="print", rules=(_red_rule(),))))

        assert compiler.compile_node(sheet) == "a{color:red;}@media print{a{color:red;}}"
        assert compiler.cache.hits == 1

    def test_cache_is_per_invocation(self) -> None:
        sheet = Stylesheet(rules=(_red_rule(), _red_rule()))

        with profiled_compile() as metrics:
            first = compile(sheet)
            second = compile(sheet)

        assert first == second
        assert metrics.compile_calls == 2
        # One hit per call (the duplicate rule); a shared cache would have
        # served the whole second call from its root entry.
        assert metrics.cache_hits == 2
        assert metrics.cache_misses == 6

    def test_options_change_output_between_calls(self) -> None:
        rule = _red_rule()
        assert compile(rule) == "a {\n  color: red;\n}"
        assert compile(rule, {"compress": True}) == "a{color:red;}"
        assert compile(rule, {"indent": "    "}) == "a {\n    color: red;\n}"

    def test_render_errors_propagate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(self, node):  # type: ignore[no-untyped-def]
            raise RenderError("cannot render declaration")

        monkeypatch.setattr(IdentityRenderer, "_render_declaration", boom)
        with pytest.raises(RenderError, match="cannot render declaration"):
            compile(_red_rule())


class TestMemoizedSourceMaps:
    """Cache hits still land in the map at the right output position."""

    def test_replayed_rule_is_mapped_at_new_position(self) -> None:
        content = "a {\n  color: red;\n}\n"
        decl = Declaration(
            property="color",
            value="red",
            location=SourceLocation(2, 3, source_file="a.css", content=content),
        )
        rule = Rule(
            selectors=("a",),
            declarations=(decl,),
            location=SourceLocation(1, 1, source_file="a.css", content=content),
        )
        sheet = Stylesheet(rules=(rule, rule))

        with profiled_compile() as metrics:
            result = compile(sheet, {"sourcemap": "generator"})

        assert isinstance(result, CompileResult)
        assert metrics.cache_hits == 1
        positions = [
            (m.generated_line, m.generated_column, m.original_line, m.original_column)
            for m in result.map.mappings()  # type: ignore[union-attr]
        ]
        assert positions == [(1, 0, 1, 0), (2, 2, 2, 2), (5, 0, 1, 0), (6, 2, 2, 2)]

    def test_replay_offsets_columns_on_the_same_line(self) -> None:
        content = "x"
        decl = Declaration(
            property="color",
            value="red",
            location=SourceLocation(1, 1, source_file="a.css", content=content),
        )
        sheet = Stylesheet(
            rules=(
                Rule(selectors=("a",), declarations=(decl, decl)),
                Rule(selectors=("b",), declarations=(decl,)),
            )
        )

        result = compile(sheet, {"sourcemap": "generator", "compress": True})

        assert isinstance(result, CompileResult)
        assert result.code == "a{color:red;color:red;}b{color:red;}"
        columns = [m.generated_column for m in result.map.mappings()]  # type: ignore[union-attr]
        assert columns == [2, 12, 25]


class TestCompileCache:
    def test_counts_hits_and_misses(self) -> None:
        cache = CompileCache()
        key = cache.key_for(None, _red_rule())

        assert cache.get(key) is None
        cache.put(key, MemoEntry("a{color:red;}"))
        assert cache.get(key) == MemoEntry("a{color:red;}")
        assert key in cache
        assert (cache.hits, cache.misses, len(cache)) == (1, 1, 1)

    def test_scope_separates_keys(self) -> None:
        rule = _red_rule()
        assert CompileCache.key_for(1, rule) != CompileCache.key_for(2, rule)
        assert CompileCache.key_for(1, rule) == CompileCache.key_for(1, _red_rule())


# =============================================================================
# Properties
# =============================================================================

locations = st.one_of(
    st.none(),
    st.builds(
        SourceLocation,
        lineno=st.integers(min_value=1, max_value=3),
        col_offset=st.integers(min_value=1, max_value=3),
        source_file=st.sampled_from([None, "a.css", "b.css"]),
    ),
)
declarations = st.builds(
    Declaration,
    property=st.sampled_from(["color", "margin"]),
    value=st.sampled_from(["red", "0"]),
    location=locations,
)
rules = st.builds(
    Rule,
    selectors=st.lists(st.sampled_from(["a", "b"]), min_size=1, max_size=2).map(tuple),
    declarations=st.lists(declarations, max_size=3).map(tuple),
    location=locations,
)
blocks = st.builds(
    Media,
    media=st.just("print"),
    rules=st.lists(rules, max_size=2).map(tuple),
    location=locations,
)
stylesheets = st.builds(
    Stylesheet,
    rules=st.lists(st.one_of(rules, blocks), max_size=5).map(tuple),
)


class TestMemoizationProperties:
    @given(sheet=stylesheets, compress=st.booleans())
    @settings(max_examples=100)
    def test_memoized_output_equals_direct_render(self, sheet: Stylesheet, compress: bool) -> None:
        options = CompileOptions(compress=compress)
        direct = (CompressedRenderer if compress else IdentityRenderer)(options).render(sheet)
        assert compile(sheet, options) == direct

    @given(sheet=stylesheets, compress=st.booleans())
    @settings(max_examples=100)
    def test_memoized_map_equals_direct_map(self, sheet: Stylesheet, compress: bool) -> None:
        options = CompileOptions(compress=compress, sourcemap=True)
        renderer = (CompressedRenderer if compress else IdentityRenderer)(options)
        tracker = SourceMapTracker(options)
        tracker.attach(renderer)
        direct_code = renderer.render(sheet)
        tracker.finalize()

        result = compile(sheet, options)

        assert isinstance(result, CompileResult)
        assert result.code == direct_code
        assert result.map == tracker.serialize()
