"""Core data types for grapher.

Benchmark timing data: a fixed schema of compiler timing measures, one
Entry per run, and a BenchmarkSeries grid indexed by (size, iteration).
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import astuple, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger("grapher.domain")

# Problem size reserved for a missing sample
NO_SIZE = -1


class GridIndexError(IndexError):
    """Raised when a (size, iteration) address falls outside a series grid."""


class SeriesFrozenError(RuntimeError):
    """Raised when a frozen BenchmarkSeries is written to."""


# ---------------------------------------------------------------------------
# Measurement schema
# ---------------------------------------------------------------------------


class MeasureKind(Enum):
    """Kind of timing measure. Values are the matching Entry field names.

    Declaration order is the canonical column order.
    """

    EXECUTE_COMPILER = "execute_compiler"
    FRONTEND = "frontend"
    SOURCE = "source"
    INSTANTIATE_FUNCTION = "instantiate_function"
    PARSE_CLASS = "parse_class"
    INSTANTIATE_CLASS = "instantiate_class"
    BACKEND = "backend"
    OPT_MODULE = "opt_module"
    PARSE_TEMPLATE = "parse_template"
    OPT_FUNCTION = "opt_function"
    RUN_PASS = "run_pass"
    PER_MODULE_PASSES = "per_module_passes"
    PERFORM_PENDING_INSTANTIATIONS = "perform_pending_instantiations"
    RUN_LOOP_PASS = "run_loop_pass"
    CODE_GEN_PASSES = "code_gen_passes"
    CODE_GEN_FUNCTION = "code_gen_function"
    PER_FUNCTION_PASSES = "per_function_passes"

    @property
    def field_name(self) -> str:
        """Name of the Entry attribute holding this measure."""
        return str(self.value)

    @property
    def display_name(self) -> str:
        return display_name_of(self)


_DISPLAY_NAMES: dict[MeasureKind, str] = {
    MeasureKind.EXECUTE_COMPILER: "Execute Compiler",
    MeasureKind.FRONTEND: "Frontend",
    MeasureKind.SOURCE: "Source",
    MeasureKind.INSTANTIATE_FUNCTION: "Instantiate Function",
    MeasureKind.PARSE_CLASS: "Parse Class",
    MeasureKind.INSTANTIATE_CLASS: "Instantiate Class",
    MeasureKind.BACKEND: "Backend",
    MeasureKind.OPT_MODULE: "Opt Module",
    MeasureKind.PARSE_TEMPLATE: "Parse Template",
    MeasureKind.OPT_FUNCTION: "Opt Function",
    MeasureKind.RUN_PASS: "Run Pass",
    MeasureKind.PER_MODULE_PASSES: "Per Module Passes",
    MeasureKind.PERFORM_PENDING_INSTANTIATIONS: "Perform Pending Instantiations",
    MeasureKind.RUN_LOOP_PASS: "Run Loop Pass",
    MeasureKind.CODE_GEN_PASSES: "Code Gen Passes",
    MeasureKind.CODE_GEN_FUNCTION: "Code Gen Function",
    MeasureKind.PER_FUNCTION_PASSES: "Per Function Passes",
}

if set(_DISPLAY_NAMES) != set(MeasureKind):
    raise RuntimeError("every MeasureKind needs a display name")

_ALL_KINDS: tuple[MeasureKind, ...] = tuple(MeasureKind)


def all_kinds() -> tuple[MeasureKind, ...]:
    """Return every measure kind in canonical column order."""
    return _ALL_KINDS


def display_name_of(kind: MeasureKind) -> str:
    """Return the human-readable label used in report headers."""
    return _DISPLAY_NAMES[kind]


def value_of(entry: Entry, kind: MeasureKind) -> int:
    """Return the measure designated by *kind* in *entry*.

    Raises:
        TypeError: *kind* is not a MeasureKind.
    """
    if not isinstance(kind, MeasureKind):
        raise TypeError(f"expected MeasureKind, got {type(kind).__name__}")
    value: int = getattr(entry, kind.field_name)
    return value


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entry:
    """All the measures of one benchmark run, plus the size it ran at.

    A size of NO_SIZE marks the entry as missing.
    """

    size: int
    execute_compiler: int = 0
    frontend: int = 0
    source: int = 0
    instantiate_function: int = 0
    parse_class: int = 0
    instantiate_class: int = 0
    backend: int = 0
    opt_module: int = 0
    parse_template: int = 0
    opt_function: int = 0
    run_pass: int = 0
    per_module_passes: int = 0
    perform_pending_instantiations: int = 0
    run_loop_pass: int = 0
    code_gen_passes: int = 0
    code_gen_function: int = 0
    per_function_passes: int = 0

    @classmethod
    def missing(cls) -> Entry:
        """Return the placeholder for a run that produced no data."""
        return cls(size=NO_SIZE)

    def is_valid(self) -> bool:
        return self.size != NO_SIZE

    def __bool__(self) -> bool:
        return self.is_valid()

    def measures(self) -> tuple[int, ...]:
        """Return the 17 measures in canonical order."""
        return astuple(self)[1:]


# ---------------------------------------------------------------------------
# Benchmark series
# ---------------------------------------------------------------------------


class BenchmarkSeries:
    """A named benchmark series: a (size, iteration) grid of entries.

    Entries are stored flat in size-major order, so the iterations of size
    index ``i`` occupy ``[i * iterations, (i + 1) * iterations)``. The shape
    is declared up front and is what validate() checks the storage against.

    A loader fills the series with append()/extend()/replace() and then
    calls freeze(); after that the series is read-only.
    """

    def __init__(
        self,
        name: str,
        size_count: int,
        iteration_count: int,
        entries: Iterable[Entry] = (),
    ) -> None:
        if size_count < 0 or iteration_count < 0:
            raise ValueError(
                f"series '{name}' has negative shape ({size_count}, {iteration_count})"
            )
        self._name = name
        self._size_count = size_count
        self._iteration_count = iteration_count
        self._entries: list[Entry] = list(entries)
        self._frozen = False

    def __repr__(self) -> str:
        return (
            f"BenchmarkSeries(name={self._name!r}, size_count={self._size_count}, "
            f"iteration_count={self._iteration_count}, entries={len(self._entries)})"
        )

    # -- Accessors ----------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def size_count(self) -> int:
        return self._size_count

    @property
    def iteration_count(self) -> int:
        return self._iteration_count

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    # -- Addressing ---------------------------------------------------------

    def _as_index(self, value: int, what: str) -> int:
        try:
            return operator.index(value)
        except TypeError as exc:
            raise GridIndexError(
                f"{what} index {value!r} is not an integer in series '{self._name}'"
            ) from exc

    def _check_size_index(self, size_index: int) -> int:
        size_index = self._as_index(size_index, "size")
        if not 0 <= size_index < self._size_count:
            raise GridIndexError(
                f"size index {size_index} out of range [0, {self._size_count}) "
                f"in series '{self._name}'"
            )
        return size_index

    def _offset(self, size_index: int, iteration_index: int) -> int:
        size_index = self._check_size_index(size_index)
        iteration_index = self._as_index(iteration_index, "iteration")
        if not 0 <= iteration_index < self._iteration_count:
            raise GridIndexError(
                f"iteration index {iteration_index} out of range "
                f"[0, {self._iteration_count}) in series '{self._name}'"
            )
        return size_index * self._iteration_count + iteration_index

    def range_for(self, size_index: int) -> tuple[Entry, ...]:
        """Return all iterations stored for *size_index*.

        Raises:
            GridIndexError: *size_index* is not an integer in ``[0, size_count)``.
        """
        size_index = self._check_size_index(size_index)
        start = size_index * self._iteration_count
        return tuple(self._entries[start : start + self._iteration_count])

    def at(self, size_index: int, iteration_index: int) -> Entry:
        """Return the entry at (*size_index*, *iteration_index*).

        Raises:
            GridIndexError: Either index is outside the declared shape, or
                that slot has not been populated yet.
        """
        offset = self._offset(size_index, iteration_index)
        if offset >= len(self._entries):
            raise GridIndexError(
                f"slot ({size_index}, {iteration_index}) of series "
                f"'{self._name}' is not populated"
            )
        return self._entries[offset]

    # -- Population ---------------------------------------------------------

    def _check_writable(self) -> None:
        if self._frozen:
            raise SeriesFrozenError(f"series '{self._name}' is frozen")

    def append(self, entry: Entry) -> None:
        self._check_writable()
        self._entries.append(entry)

    def extend(self, entries: Iterable[Entry]) -> None:
        self._check_writable()
        self._entries.extend(entries)

    def replace(self, size_index: int, iteration_index: int, entry: Entry) -> None:
        """Overwrite an already populated slot."""
        self._check_writable()
        offset = self._offset(size_index, iteration_index)
        if offset >= len(self._entries):
            raise GridIndexError(
                f"slot ({size_index}, {iteration_index}) of series "
                f"'{self._name}' is not populated"
            )
        self._entries[offset] = entry

    def freeze(self) -> None:
        """End the population phase. Idempotent."""
        self._frozen = True

    # -- Validation ---------------------------------------------------------

    def validate(self) -> bool:
        """Check the storage against the declared shape.

        True iff exactly ``size_count * iteration_count`` entries are stored
        and every size index holds a single problem size across its
        iterations.
        """
        expected = self._size_count * self._iteration_count
        if len(self._entries) != expected:
            logger.debug(
                "Series '%s': %d entries stored, %d expected",
                self._name,
                len(self._entries),
                expected,
            )
            return False

        for size_index in range(self._size_count):
            bucket = self.range_for(size_index)
            if not bucket:
                continue
            sizes = {e.size for e in bucket}
            if len(sizes) > 1:
                logger.debug(
                    "Series '%s': size index %d mixes sizes %s",
                    self._name,
                    size_index,
                    sorted(sizes),
                )
                return False

        return True

    def problem_sizes(self) -> tuple[int, ...]:
        """Return the problem size of each size index, in order.

        Raises:
            ValueError: The series does not validate.
        """
        if not self.validate():
            raise ValueError(f"series '{self._name}' is not a valid grid")
        if self._iteration_count == 0:
            return ()
        return tuple(self.range_for(i)[0].size for i in range(self._size_count))


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


@dataclass
class Category:
    """An ordered group of benchmark series reported together."""

    name: str
    series: list[BenchmarkSeries] = field(default_factory=list)

    def append(self, series: BenchmarkSeries) -> None:
        self.series.append(series)

    def names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.series)

    def __len__(self) -> int:
        return len(self.series)

    def __iter__(self) -> Iterator[BenchmarkSeries]:
        return iter(self.series)
