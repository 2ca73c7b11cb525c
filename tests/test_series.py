"""Tests for BenchmarkSeries grids and Category."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from domain.models import (
    NO_SIZE,
    BenchmarkSeries,
    Category,
    Entry,
    GridIndexError,
    SeriesFrozenError,
)

if TYPE_CHECKING:
    from collections.abc import Callable


# ---------------------------------------------------------------------------
# Construction and accessors
# ---------------------------------------------------------------------------


def test_accessors(series: BenchmarkSeries) -> None:
    assert series.name == "fib"
    assert series.size_count == 2
    assert series.iteration_count == 3
    assert len(series) == 6
    assert list(series) == list(series.entries)


def test_empty_construction_declares_shape_only() -> None:
    s = BenchmarkSeries("empty", 4, 10)
    assert s.size_count == 4
    assert s.iteration_count == 10
    assert len(s) == 0
    assert s.entries == ()


def test_negative_shape_is_rejected() -> None:
    with pytest.raises(ValueError, match="negative shape"):
        BenchmarkSeries("bad", -1, 3)


def test_entries_is_a_snapshot(series: BenchmarkSeries) -> None:
    snapshot = series.entries
    series.append(Entry(size=30))
    assert len(snapshot) == 6
    assert len(series.entries) == 7


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------


def test_at_uses_size_major_offset(series: BenchmarkSeries) -> None:
    """at(1, 2) on a 2x3 grid is flat offset 1*3+2 = 5."""
    assert series.at(1, 2) is series.entries[5]
    assert series.at(1, 2).size == 20
    assert series.at(0, 0) is series.entries[0]


def test_range_for_returns_bucket(series: BenchmarkSeries) -> None:
    bucket = series.range_for(1)
    assert len(bucket) == 3
    assert bucket == series.entries[3:6]
    assert {e.size for e in bucket} == {20}


@pytest.mark.parametrize("size_index", [2, 5, -1])
def test_range_for_out_of_bounds(series: BenchmarkSeries, size_index: int) -> None:
    with pytest.raises(GridIndexError):
        series.range_for(size_index)


def test_grid_index_error_is_index_error(series: BenchmarkSeries) -> None:
    with pytest.raises(IndexError):
        series.range_for(2)


@pytest.mark.parametrize(
    ("size_index", "iteration_index"),
    [(2, 0), (0, 3), (-1, 0), (0, -1), (1, 3)],
)
def test_at_out_of_bounds(
    series: BenchmarkSeries, size_index: int, iteration_index: int
) -> None:
    with pytest.raises(GridIndexError):
        series.at(size_index, iteration_index)


@pytest.mark.parametrize("bad_index", [0.5, "1", None])
def test_non_integer_indices_are_rejected(
    series: BenchmarkSeries, bad_index: object
) -> None:
    with pytest.raises(GridIndexError, match="not an integer"):
        series.range_for(bad_index)  # type: ignore[arg-type]
    with pytest.raises(GridIndexError, match="not an integer"):
        series.at(0, bad_index)  # type: ignore[arg-type]
    with pytest.raises(GridIndexError, match="not an integer"):
        series.at(bad_index, 0)  # type: ignore[arg-type]


def test_at_unpopulated_slot_raises(entry_factory: Callable[..., Entry]) -> None:
    s = BenchmarkSeries("partial", 2, 3, [entry_factory(10)] * 4)
    assert s.at(1, 0).size == 10
    with pytest.raises(GridIndexError, match="not populated"):
        s.at(1, 1)


def test_range_for_partial_bucket(entry_factory: Callable[..., Entry]) -> None:
    s = BenchmarkSeries("partial", 2, 3, [entry_factory(10)] * 4)
    assert len(s.range_for(1)) == 1


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


def test_well_formed_series_validates(series: BenchmarkSeries) -> None:
    assert series.validate() is True


def test_mixed_sizes_in_bucket_fail(
    series_factory: Callable[..., BenchmarkSeries],
    entry_factory: Callable[..., Entry],
) -> None:
    s = series_factory()
    s.replace(0, 1, entry_factory(99))
    assert s.validate() is False


def test_short_series_fails(entry_factory: Callable[..., Entry]) -> None:
    entries = [entry_factory(10)] * 3 + [entry_factory(20)] * 2
    s = BenchmarkSeries("short", 2, 3, entries)
    assert s.validate() is False


def test_long_series_fails(entry_factory: Callable[..., Entry]) -> None:
    entries = [entry_factory(10)] * 3 + [entry_factory(20)] * 4
    s = BenchmarkSeries("long", 2, 3, entries)
    assert s.validate() is False


def test_empty_shape_validates() -> None:
    assert BenchmarkSeries("none", 0, 0).validate() is True
    assert BenchmarkSeries("no-iterations", 3, 0).validate() is True


def test_missing_entries_do_not_break_grid() -> None:
    """A whole bucket of missing samples still shares one size value."""
    entries = [Entry(size=10)] * 2 + [Entry.missing()] * 2
    s = BenchmarkSeries("holes", 2, 2, entries)
    assert s.validate() is True


def test_single_missing_entry_in_bucket_fails() -> None:
    entries = [Entry(size=10), Entry(size=NO_SIZE)]
    s = BenchmarkSeries("hole", 1, 2, entries)
    assert s.validate() is False


def test_validate_does_not_mutate_or_raise(entry_factory: Callable[..., Entry]) -> None:
    entries = [entry_factory(10)] * 5
    s = BenchmarkSeries("short", 2, 3, entries)
    before = s.entries
    assert s.validate() is False
    assert s.entries == before


def test_validate_logs_reason(
    entry_factory: Callable[..., Entry], caplog: pytest.LogCaptureFixture
) -> None:
    s = BenchmarkSeries("short", 2, 3, [entry_factory(10)] * 5)
    with caplog.at_level(logging.DEBUG, logger="grapher.domain"):
        s.validate()
    assert "5 entries stored, 6 expected" in caplog.text


# ---------------------------------------------------------------------------
# Population lifecycle
# ---------------------------------------------------------------------------


def test_incremental_population(entry_factory: Callable[..., Entry]) -> None:
    s = BenchmarkSeries("loaded", 2, 2)
    s.append(entry_factory(1))
    s.extend([entry_factory(1), entry_factory(2)])
    assert s.validate() is False
    s.append(entry_factory(2))
    assert s.validate() is True


def test_replace_requires_populated_slot(entry_factory: Callable[..., Entry]) -> None:
    s = BenchmarkSeries("loaded", 1, 2, [entry_factory(1)])
    with pytest.raises(GridIndexError):
        s.replace(0, 1, entry_factory(1))


def test_frozen_series_rejects_writes(
    series: BenchmarkSeries, entry_factory: Callable[..., Entry]
) -> None:
    series.freeze()
    assert series.frozen
    with pytest.raises(SeriesFrozenError):
        series.append(entry_factory())
    with pytest.raises(SeriesFrozenError):
        series.extend([entry_factory()])
    with pytest.raises(SeriesFrozenError):
        series.replace(0, 0, entry_factory())
    assert series.validate() is True


def test_problem_sizes(series_factory: Callable[..., BenchmarkSeries]) -> None:
    s = series_factory(sizes=(8, 16, 32), iterations=2)
    assert s.problem_sizes() == (8, 16, 32)


def test_problem_sizes_requires_valid_grid(entry_factory: Callable[..., Entry]) -> None:
    s = BenchmarkSeries("short", 2, 3, [entry_factory(10)] * 5)
    with pytest.raises(ValueError, match="not a valid grid"):
        s.problem_sizes()


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


def test_category_keeps_insertion_order(
    series_factory: Callable[..., BenchmarkSeries],
) -> None:
    cat = Category("templates")
    cat.append(series_factory("b"))
    cat.append(series_factory("a"))
    cat.append(series_factory("c"))
    assert len(cat) == 3
    assert cat.names() == ("b", "a", "c")
    assert [s.name for s in cat] == ["b", "a", "c"]


def test_category_accepts_invalid_members(entry_factory: Callable[..., Entry]) -> None:
    cat = Category("mixed", [BenchmarkSeries("short", 2, 3, [entry_factory()])])
    assert len(cat) == 1
    assert not next(iter(cat)).validate()
