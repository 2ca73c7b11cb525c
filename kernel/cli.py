#!/usr/bin/env python3
"""
grapher CLI -- inspect the benchmark measurement schema and settings.

Usage:
  grapher [--config PATH] [--verbose] schema
  grapher [--config PATH] [--verbose] config
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from domain.models import all_kinds
from kernel.config import ConfigError, Settings, config_file, load_settings
from kernel.console import configure, console

logger = logging.getLogger("grapher.cli")

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _setup_logging(settings: Settings, *, verbose: bool = False) -> None:
    """Install one handler on the root logger: a log file if configured, stderr otherwise."""
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else settings.log_level)
    root.addHandler(handler)


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def cmd_schema() -> None:
    """Print every measure kind in canonical column order."""
    rows = [[str(i), k.field_name, k.display_name] for i, k in enumerate(all_kinds())]
    console.table(["#", "Key", "Measure"], rows, title="Measurement schema")
    logger.debug("Listed %d measure kinds", len(rows))


def cmd_config(settings: Settings, path: Path) -> None:
    """Display the effective settings."""
    console.kv(
        {
            "Config file": str(path) if path.exists() else f"{path} (not found, defaults)",
            "Console": settings.console_backend,
            "Log level": settings.log_level,
            "Log file": settings.log_file or "-",
        },
        title="Settings",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="grapher",
        description="grapher -- compiler benchmark timing data",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: .grapher/config.yaml)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # grapher schema
    sub.add_parser("schema", help="List measure kinds in column order")

    # grapher config
    sub.add_parser("config", help="Show effective settings")

    args = parser.parse_args(argv)

    path: Path = args.config or config_file(Path.cwd())
    try:
        settings = load_settings(path)
    except ConfigError as exc:
        console.error(str(exc))
        sys.exit(2)

    configure(backend=settings.console_backend)
    _setup_logging(settings, verbose=args.verbose)
    logger.debug("Loaded settings from %s", path)

    if args.command == "schema":
        cmd_schema()
    elif args.command == "config":
        cmd_config(settings, path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
