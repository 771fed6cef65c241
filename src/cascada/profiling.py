"""Cascada CompileAccumulator: opt-in profiling for stylesheet compilation.

This module provides accumulated metrics during compilation:
- Total compile time
- Output length
- Node count of compiled trees
- Compile cache hits and misses

Zero overhead when disabled (get_compile_accumulator() returns None).

Example:
    from cascada import compile
    from cascada.profiling import profiled_compile

    # Normal compile (no overhead)
    css = compile(sheet)

    # Profiled compile (opt-in)
    with profiled_compile() as metrics:
        css = compile(sheet, {"compress": True})

    print(metrics.summary())
    # {"total_ms": 0.4, "compile_calls": 1, "node_count": 12, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class CompileAccumulator:
    """Accumulated metrics during stylesheet compilation.

    Attributes:
        start_time: Profiling start timestamp.
        compile_calls: Number of compile() calls recorded.
        node_count: Total nodes in the compiled trees.
        output_length: Total characters of generated CSS.
        cache_hits: Subtree renders served from the compile cache.
        cache_misses: Subtree renders that reached the renderer.

    """

    start_time: float = field(default_factory=perf_counter)
    compile_calls: int = 0
    node_count: int = 0
    output_length: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    def record_compile(
        self,
        *,
        node_count: int,
        output_length: int,
        cache_hits: int,
        cache_misses: int,
    ) -> None:
        """Record one compile() call."""
        self.compile_calls += 1
        self.node_count += node_count
        self.output_length += output_length
        self.cache_hits += cache_hits
        self.cache_misses += cache_misses

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of compile metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "compile_calls": self.compile_calls,
            "node_count": self.node_count,
            "output_length": self.output_length,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
        }


_accumulator: ContextVar[CompileAccumulator | None] = ContextVar(
    "compile_accumulator",
    default=None,
)


def get_compile_accumulator() -> CompileAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_compile() -> Iterator[CompileAccumulator]:
    """Context manager for profiled compilation.

    Creates a CompileAccumulator and makes it available via
    get_compile_accumulator() for the duration of the with block.

    Yields:
        CompileAccumulator that will be populated during compile calls.

    """
    acc = CompileAccumulator()
    token: Token[CompileAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
