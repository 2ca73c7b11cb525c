"""kernel.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for grapher's terminal output.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """grapher terminal output protocol.

    Two layers of methods:

    **General messages** -- usable from any module::

        console.info("Loaded 3 series")
        console.success("All series valid")
        console.warning("Series 'fib' does not form a grid")
        console.error("Bad config file")

    **Structured panels** -- tables, key-value displays, panels::

        console.panel("compile-time benchmarks", title="Category")
        console.table(["Size", "Frontend"], [["10", "1200"]], title="fib")
        console.kv({"Sizes": "4", "Iterations": "10"})
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    # -- Structured panels --------------------------------------------------

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        """Display *content* in a bordered panel."""
        ...

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        """Display a table with *headers* and *rows*."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...
