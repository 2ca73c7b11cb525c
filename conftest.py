"""Shared pytest fixtures and test factories for grapher.

Provides:
- Factory functions for Entry and BenchmarkSeries with sensible defaults
- Pytest fixtures wrapping the most commonly used factories
- A fixture that pins the console to the plain backend
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from domain.models import BenchmarkSeries, Entry, all_kinds

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence


# ── Factory Functions ─────────────────────────────────────────────────────


def make_entry(size: int = 10, *, base: int = 0, **overrides: int) -> Entry:
    """Create an Entry whose measures are ``base + 1 .. base + 17``.

    Every measure gets a distinct value so tests can tell fields apart.
    """
    values: dict[str, int] = {
        kind.field_name: base + i + 1 for i, kind in enumerate(all_kinds())
    }
    values.update(overrides)
    return Entry(size=size, **values)


def make_series(
    name: str = "fib",
    sizes: Sequence[int] = (10, 20),
    iterations: int = 3,
) -> BenchmarkSeries:
    """Create a well-formed series: one bucket per size, *iterations* entries each."""
    entries = [
        make_entry(size, base=100 * (s * iterations + it))
        for s, size in enumerate(sizes)
        for it in range(iterations)
    ]
    return BenchmarkSeries(name, len(sizes), iterations, entries)


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def entry_factory() -> Callable[..., Entry]:
    return make_entry


@pytest.fixture
def series_factory() -> Callable[..., BenchmarkSeries]:
    return make_series


@pytest.fixture
def series() -> BenchmarkSeries:
    """A 2x3 series: sizes 10 and 20, three iterations each."""
    return make_series()


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Route console output through PlainBackend for the duration of a test."""
    from kernel import console as console_pkg
    from kernel.console._plain import PlainBackend

    previous = console_pkg._backend
    console_pkg._backend = PlainBackend()
    try:
        yield
    finally:
        console_pkg._backend = previous


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo handler and level changes made to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for h in root.handlers:
            if h not in handlers:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)
