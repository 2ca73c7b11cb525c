"""Report module -- renders benchmark series as measure tables.

Walks each series in storage order and emits one row per entry, with
columns in canonical measure order. Series that fail validation are
reported and skipped rather than rendered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from domain.models import all_kinds, display_name_of, value_of
from kernel.console import console

if TYPE_CHECKING:
    from domain.models import BenchmarkSeries, Category

logger = logging.getLogger("grapher.report")

_MISSING_CELL = "-"


def series_headers() -> list[str]:
    """Return table headers: size, iteration, then one column per measure."""
    return ["Size", "Iteration", *(display_name_of(k) for k in all_kinds())]


def series_rows(series: BenchmarkSeries, *, skip_invalid: bool = True) -> list[list[str]]:
    """Build table rows for *series*, one per stored entry.

    Args:
        series: The series to tabulate. Not validated here.
        skip_invalid: Drop missing entries. When False they are kept as
            rows of ``-`` cells so the grid stays visible.

    Returns:
        Rows of string cells matching series_headers().
    """
    rows: list[list[str]] = []
    kinds = all_kinds()
    iterations = series.iteration_count

    for offset, entry in enumerate(series):
        iteration = offset % iterations if iterations else 0
        if not entry.is_valid():
            if skip_invalid:
                continue
            rows.append([_MISSING_CELL, str(iteration), *(_MISSING_CELL for _ in kinds)])
            continue
        rows.append(
            [str(entry.size), str(iteration), *(str(value_of(entry, k)) for k in kinds)]
        )

    return rows


def render_series(series: BenchmarkSeries, *, skip_invalid: bool = True) -> bool:
    """Validate *series* and print it as a table.

    Returns:
        True if the series was rendered, False if it failed validation.
    """
    if not series.validate():
        logger.warning(
            "Series '%s' does not match its declared %dx%d shape",
            series.name,
            series.size_count,
            series.iteration_count,
        )
        console.warning(
            f"Series '{series.name}' is not a valid "
            f"{series.size_count}x{series.iteration_count} grid, skipped"
        )
        return False

    rows = series_rows(series, skip_invalid=skip_invalid)
    console.table(series_headers(), rows, title=series.name)
    logger.debug("Rendered series '%s' (%d rows)", series.name, len(rows))
    return True


def render_category(category: Category, *, skip_invalid: bool = True) -> int:
    """Render every series of *category* in order.

    Returns:
        Number of series rendered.
    """
    console.panel(f"{len(category)} series", title=category.name)
    rendered = sum(render_series(s, skip_invalid=skip_invalid) for s in category)
    if rendered == len(category):
        console.success(f"{rendered} series rendered")
    else:
        console.warning(f"{rendered}/{len(category)} series rendered")
    logger.info("Category '%s': rendered %d/%d series", category.name, rendered, len(category))
    return rendered
